"""
Unit tests for event logger utility.
"""
import pytest
from unittest.mock import Mock
from sqlalchemy.exc import SQLAlchemyError

from cerberus_platform.account_service.models import AccountEvent
from cerberus_platform.account_service.utils.event_logger import client_ip_address, log_account_event


@pytest.fixture
def test_user(create_user):
    return create_user(email="test@example.com")


@pytest.fixture
def mock_request():
    """Create a mock FastAPI Request object."""
    request = Mock()
    request.client = Mock()
    request.client.host = "192.168.1.1"
    request.headers = {"user-agent": "Mozilla/5.0 Test Browser"}
    return request


def test_log_account_event_creates_record(db_session, test_user, mock_request):
    log_account_event("login_success", test_user, db_session, mock_request)

    events = db_session.query(AccountEvent).filter(AccountEvent.user_id == test_user.id).all()
    assert len(events) == 1
    assert events[0].event_type == "login_success"
    assert events[0].email == "test@example.com"
    assert events[0].ip_address == "192.168.1.1"
    assert events[0].user_agent == "Mozilla/5.0 Test Browser"
    assert events[0].timestamp is not None


def test_log_account_event_without_request(db_session, test_user):
    log_account_event("account_created", test_user, db_session)

    event = db_session.query(AccountEvent).one()
    assert event.ip_address is None
    assert event.user_agent is None
    assert event.event_metadata == {}


def test_log_account_event_stores_metadata(db_session, test_user):
    log_account_event("account_updated", test_user, db_session, metadata={"fields": ["last_name"]})

    event = db_session.query(AccountEvent).one()
    assert event.to_dict()["metadata"] == {"fields": ["last_name"]}
    assert event.to_dict()["user_id"] == test_user.id


def test_log_account_event_rejects_unknown_type(db_session, test_user):
    with pytest.raises(ValueError, match="Invalid event_type"):
        log_account_event("password_reset", test_user, db_session)


def test_log_account_event_swallows_database_errors(test_user):
    db = Mock()
    db.commit.side_effect = SQLAlchemyError("database unavailable")

    log_account_event("login_failure", test_user, db)

    db.rollback.assert_called_once()


def test_client_ip_falls_back_to_forwarded_header():
    request = Mock()
    request.client = None
    request.headers = {"x-forwarded-for": "203.0.113.7, 10.0.0.1"}

    assert client_ip_address(request) == "203.0.113.7"


def test_client_ip_without_request():
    assert client_ip_address(None) is None
