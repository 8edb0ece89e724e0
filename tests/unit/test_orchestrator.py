"""
Orchestrator tests: setup/teardown lifecycle and CRUD execution
"""

import httpx
import pytest

from user_contract.errors import CleanupError, ContractViolation, PaginationPreconditionError, UnexpectedStatusError


class TestLifecycle:

    async def test_create_records_id_before_teardown(self, orchestrator, fake_api):
        await orchestrator.setup()

        result = await orchestrator.execute_create(orchestrator.data_factory.generate_user())

        assert orchestrator.tracker.tracked == [result.uuid]
        assert result.uuid in fake_api.users

    async def test_teardown_removes_created_users_after_failed_assertion(self, orchestrator, fake_api):
        await orchestrator.setup()
        result = await orchestrator.execute_create(orchestrator.data_factory.generate_user())

        with pytest.raises(ContractViolation):
            await orchestrator.execute_update(result.uuid, {"email": "changed@example.com"})

        await orchestrator.teardown()

        assert result.uuid not in fake_api.users
        assert len(orchestrator.tracker) == 0
        assert orchestrator.last_cleanup.deleted == [result.uuid]

    async def test_teardown_reports_cleanup_violations(self, orchestrator, fake_api):
        result = await orchestrator.execute_create(orchestrator.data_factory.generate_user())
        fake_api.delete_status_overrides[result.uuid] = 503

        with pytest.raises(CleanupError):
            await orchestrator.teardown()

        assert len(orchestrator.tracker) == 0

    async def test_setup_drains_leftovers(self, orchestrator, fake_api):
        result = await orchestrator.execute_create(orchestrator.data_factory.generate_user())

        await orchestrator.setup()

        assert result.uuid not in fake_api.users
        assert len(orchestrator.tracker) == 0


class TestOperations:

    async def test_full_crud_cycle(self, orchestrator, fake_api):
        cycle = await orchestrator.execute_crud_cycle()

        assert cycle.create_result.body["firstName"] == "Jack"
        assert cycle.read_result.success
        assert cycle.update_result.body["lastName"] == "White"
        assert cycle.delete_result.body == {"id": cycle.create_result.uuid}
        assert cycle.verify_delete_status == 400
        assert cycle.create_result.uuid not in fake_api.users

        # the cycle deleted its user; cleanup must accept the 404
        await orchestrator.teardown()
        assert orchestrator.last_cleanup.already_absent == [cycle.create_result.uuid]

    async def test_crud_cycle_strict_not_found(self, orchestrator, fake_api, monkeypatch):
        cycle = await orchestrator.execute_crud_cycle(strict_not_found=True)
        assert cycle.verify_delete_status == 400

        original_get = fake_api._get

        def get_answering_404_when_missing(user_id):
            if user_id not in fake_api.users:
                return httpx.Response(404, json={"error": "RESOURCE_NOT_FOUND"})
            return original_get(user_id)

        monkeypatch.setattr(fake_api, "_get", get_answering_404_when_missing)

        lenient = await orchestrator.execute_crud_cycle()
        assert lenient.verify_delete_status == 404

        with pytest.raises(ContractViolation, match="DELETE finality"):
            await orchestrator.execute_crud_cycle(strict_not_found=True)

    async def test_create_result_carries_server_id_unchanged(self, orchestrator):
        result = await orchestrator.execute_create(orchestrator.data_factory.generate_user())

        assert result.uuid == result.body["id"]
        assert orchestrator.tracker.tracked == [result.body["id"]]

    async def test_duplicate_create_raises_and_records_nothing(self, orchestrator):
        user = orchestrator.data_factory.generate_user()
        await orchestrator.execute_create(user)

        with pytest.raises(UnexpectedStatusError) as exc_info:
            await orchestrator.execute_create(user)

        assert exc_info.value.status_code == 400
        assert exc_info.value.body["data"]["email"] == "Email already used"
        assert len(orchestrator.tracker) == 1

    async def test_read_disagreement_is_a_violation(self, orchestrator):
        result = await orchestrator.execute_create(orchestrator.data_factory.generate_user())

        with pytest.raises(ContractViolation, match="READ"):
            await orchestrator.execute_read(result.uuid, {"firstName": "Somebody Else"})

    async def test_list_defaults(self, orchestrator):
        result = await orchestrator.execute_list()

        assert result.body["page"] == 0
        assert result.body["limit"] == 20
        assert len(result.body["data"]) == 20

    async def test_probe_total_sees_new_users(self, orchestrator):
        before = await orchestrator.probe_total()
        await orchestrator.execute_create(orchestrator.data_factory.generate_user())

        assert await orchestrator.probe_total() == before + 1

    async def test_beyond_last_page(self, orchestrator):
        result = await orchestrator.verify_beyond_last_page(limit=50)

        assert result.body["page"] == 2
        assert result.body["data"] == []

    async def test_beyond_last_page_on_exact_multiple(self, orchestrator, fake_api):
        for user_id in list(fake_api.users)[:7]:
            del fake_api.users[user_id]

        result = await orchestrator.verify_beyond_last_page(limit=50)

        assert result.body["total"] == 50
        assert result.body["page"] == 2

    async def test_page_size_law(self, orchestrator):
        result = await orchestrator.verify_page_size_law(limit=10)

        assert len(result.body["data"]) == 10

    async def test_page_size_law_requires_population(self, orchestrator, fake_api):
        fake_api.users.clear()

        with pytest.raises(PaginationPreconditionError):
            await orchestrator.verify_page_size_law(limit=10)


class TestSummaries:

    async def test_performance_and_success_summary(self, orchestrator):
        assert orchestrator.get_performance_summary() == {"message": "No results available"}

        await orchestrator.execute_crud_cycle()

        performance = orchestrator.get_performance_summary()
        assert set(performance) == {"CREATE", "READ", "UPDATE", "DELETE"}
        assert performance["CREATE"]["count"] == 1
        assert orchestrator.get_success_summary()["success_rate"] == 1
