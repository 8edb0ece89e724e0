"""
Lightweight test data factory
Generates realistic but clearly-marked users with unique emails
"""

import uuid
from typing import Any, Dict, Optional

from faker import Faker

from user_contract.config import TestConfig, get_config
from user_contract.models import UserCreate, UserUpdate


class DataFactory:
    """Lightweight test data generator"""

    def __init__(self, config: Optional[TestConfig] = None):
        self.config = config or get_config()
        self.fake = Faker()

    def unique_token(self) -> str:
        return uuid.uuid4().hex[:12]

    def unique_email(self, local_part: Optional[str] = None) -> str:
        """Email that cannot collide with other runs (uniqueness is enforced remotely)"""
        prefix = self.config.test_data_prefix.lower().replace("_", "-")
        local = local_part or self.fake.user_name()
        return f"{local}+{prefix}-{self.unique_token()}@{self.config.email_domain}"

    def generate_user(self, **overrides) -> Dict[str, Any]:
        data = UserCreate(
            firstName=self.fake.first_name(),
            lastName=self.fake.last_name(),
            email=self.unique_email(),
        ).to_body()
        data.update(overrides)
        return data

    def generate_jack_black(self, **overrides) -> Dict[str, Any]:
        data = UserCreate(firstName="Jack", lastName="Black", email=self.unique_email("jack")).to_body()
        data.update(overrides)
        return data

    def generate_update(self, **overrides) -> Dict[str, Any]:
        data = UserUpdate(firstName="Walter", lastName="White").to_body()
        data.update(overrides)
        return data

    def nonexistent_id(self) -> str:
        return "99999"
