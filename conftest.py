"""
Root pytest configuration
"""

# Same name as the pytest11 entry point, so an installed plugin is not loaded twice
pytest_plugins = ["user_contract.plugin", "pytester"]
