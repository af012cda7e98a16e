"""Tests for audit logging and the session wiring."""

import asyncio
import logging

import pytest

from expense_tracker.audit import AuditLogger, create_correlation_id
from expense_tracker.config import get_settings, validate_all_settings
from expense_tracker.controllers import (
    ExpenseListController,
    ManageExpenseController,
    ScreenState,
)
from expense_tracker.models.audit import AuditEventBuilder
from expense_tracker.models.expense import AmountInput
from expense_tracker.orchestrator import ExpenseSession, create_app_components
from expense_tracker.services.remote import HttpExpenseService, NetworkError


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_logs_at_event_severity(self, audit_logger, recording_logger):
        asyncio.run(audit_logger.log(AuditEventBuilder.expenses_fetched(count=2)))
        asyncio.run(audit_logger.log(AuditEventBuilder.update_rolled_back("7")))
        asyncio.run(audit_logger.log(AuditEventBuilder.expense_delete_failed("7", "boom")))

        levels = [level for level, _, _ in recording_logger.entries]
        assert levels == ["info", "warning", "error"]
        assert all(event == "audit_event" for _, event, _ in recording_logger.entries)

    def test_log_failure_does_not_raise(self):
        class BrokenLogger:
            def info(self, *args, **kwargs):
                raise RuntimeError("disk full")

        audit_logger = AuditLogger(logger=BrokenLogger())
        written = asyncio.run(audit_logger.log(AuditEventBuilder.expenses_fetched(count=1)))
        assert written is False

    def test_correlation_ids_are_unique(self):
        assert create_correlation_id() != create_correlation_id()


class TestControllerAuditTrail:
    """Controllers record every remote outcome."""

    def test_fetch_events(self, service, store, audit_logger, recording_logger):
        controller = ExpenseListController(service, store, audit_logger=audit_logger)
        asyncio.run(controller.load())

        service.fail_with = NetworkError("boom")
        asyncio.run(controller.load())

        assert recording_logger.event_types() == ["expenses_fetched", "expenses_fetch_failed"]
        correlation_ids = {fields["correlation_id"] for _, _, fields in recording_logger.entries}
        assert correlation_ids == {str(controller.correlation_id)}

    def test_optimistic_failure_is_a_warning(
        self, service, store, coffee, audit_logger, recording_logger
    ):
        store.add(coffee)
        service.fail_with = NetworkError("boom")
        controller = ManageExpenseController(
            service, store, expense_id="7", audit_logger=audit_logger,
        )
        controller.apply(AmountInput(text="4.25"))
        asyncio.run(controller.confirm())

        level, _, fields = recording_logger.entries[0]
        assert level == "warning"
        assert fields["event_type"] == "expense_save_failed"
        assert fields["details"] == {"optimistic_change_kept": True}
        assert fields["error_message"] == "boom"

    def test_rollback_is_logged(self, service, store, coffee, audit_logger, recording_logger):
        store.add(coffee)
        service.fail_with = NetworkError("boom")
        controller = ManageExpenseController(
            service, store, expense_id="7",
            audit_logger=audit_logger, rollback_failed_updates=True,
        )
        controller.apply(AmountInput(text="4.25"))
        asyncio.run(controller.confirm())

        assert recording_logger.event_types() == ["expense_save_failed", "update_rolled_back"]

    def test_delete_logged(self, service, store, coffee, audit_logger, recording_logger):
        store.add(coffee)
        controller = ManageExpenseController(
            service, store, expense_id="7", audit_logger=audit_logger,
        )
        asyncio.run(controller.delete())

        assert recording_logger.event_types() == ["expense_deleted"]
        assert recording_logger.entries[0][2]["expense_id"] == "7"


class TestExpenseSession:
    """Tests for the session wiring."""

    def test_screens_share_the_store(self, service, coffee):
        service.records = {coffee.id: coffee.to_draft()}
        session = ExpenseSession(service=service)

        asyncio.run(session.list_screen().load())
        manage = session.manage_screen("7")
        asyncio.run(manage.delete())

        assert manage.state == ScreenState.DONE
        assert session.list_screen().snapshot().expenses == ()

    def test_rollback_setting_reaches_manage_screen(self, service, coffee):
        session = ExpenseSession(service=service, rollback_failed_updates=True)
        session.store.add(coffee)
        service.fail_with = NetworkError("boom")

        manage = session.manage_screen("7")
        manage.apply(AmountInput(text="4.25"))
        asyncio.run(manage.confirm())

        assert session.store.get("7") == coffee


class TestCreateAppComponents:
    """Tests for the factory reading settings from the environment."""

    @pytest.fixture(autouse=True)
    def clean_settings(self, monkeypatch):
        monkeypatch.setenv("EXPENSES_API_BASE_URL", "https://expenses.example.test")
        monkeypatch.setenv("ROLLBACK_FAILED_UPDATES", "true")
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_builds_http_session(self):
        session = create_app_components()

        assert isinstance(session.service, HttpExpenseService)
        assert len(session.store) == 0
        assert session.audit_logger is not None
        assert session.rollback_failed_updates is True

    def test_injected_service_is_used(self, service):
        session = create_app_components(service=service)
        assert session.service is service

    def test_debug_mode_sets_package_log_level(self, monkeypatch):
        package_logger = logging.getLogger("expense_tracker")
        monkeypatch.setattr(package_logger, "level", package_logger.level)
        monkeypatch.delenv("DEBUG_MODE", raising=False)

        create_app_components()
        assert package_logger.level == logging.INFO

        monkeypatch.setenv("DEBUG_MODE", "true")
        create_app_components()
        assert package_logger.level == logging.DEBUG

    def test_validate_all_settings(self):
        assert validate_all_settings() == {"remote": True, "app": True}

    def test_validate_reports_missing_remote(self, monkeypatch):
        monkeypatch.delenv("EXPENSES_API_BASE_URL")
        status = validate_all_settings()
        assert status["remote"] is False
        assert "remote_error" in status
