"""Unit tests for the JiraService HTTP wrapper.

The requests.Session is mocked so no real HTTP calls are made.
"""

from unittest.mock import MagicMock

import pytest
import requests

from jira_tracker_client.jira_service import JiraService
from tracker_client_interface.errors import InvariantViolation, IssueNotFoundError, RemoteServiceError
from tracker_client_interface.issue import Comment

BASE_URL = "https://test.atlassian.net"


def make_response(status_code=200, payload=None, url=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.url = url
    response.content = b"" if payload is None else b"{...}"
    response.json.return_value = payload
    return response


#Fixture for mock tests
@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def jira_service(session):
    """Returns a JiraService whose session never touches the network."""
    return JiraService(BASE_URL, "test@example.com", "dummy_token", timeout=5, session=session)


#--------------------------- tests for construction --------------------------

def test_service_sets_basic_auth_and_json_headers(jira_service, session):
    assert isinstance(session.auth, requests.auth.HTTPBasicAuth)
    assert session.auth.username == "test@example.com"
    session.headers.update.assert_called_once_with({"Accept": "application/json", "Content-Type": "application/json"})


#--------------------------- tests for read operations --------------------------

def test_fetch_server_info(jira_service, session):
    session.request.return_value = make_response(payload={
        "baseUrl": BASE_URL,
        "version": "1001.0.0-SNAPSHOT",
        "versionNumbers": [1001, 0, 0],
        "deploymentType": "Cloud",
        "buildNumber": 100275,
        "serverTitle": "Jira",
    })

    info = jira_service.fetch_server_info()

    session.request.assert_called_once_with("GET", f"{BASE_URL}/rest/api/3/serverInfo", timeout=5, params=None)
    assert info.version == "1001.0.0-SNAPSHOT"
    assert info.version_numbers == (1001, 0, 0)
    assert info.deployment_type == "Cloud"


def test_fetch_issue_builds_issue(jira_service, session):
    session.request.return_value = make_response(payload={
        "key": "ABC-1",
        "self": f"{BASE_URL}/rest/api/3/issue/10001",
        "fields": {"summary": "Clean up TODOs"},
    })

    issue = jira_service.fetch_issue("ABC-1")

    assert session.request.call_args.args == ("GET", f"{BASE_URL}/rest/api/3/issue/ABC-1")
    assert issue.key == "ABC-1"
    assert issue.title == "Clean up TODOs"
    assert issue.comments_url == f"{BASE_URL}/rest/api/3/issue/10001/comment"


def test_fetch_issue_404_raises_issue_not_found(jira_service, session):
    session.request.return_value = make_response(404, url=f"{BASE_URL}/rest/api/3/issue/BAD-1")

    with pytest.raises(IssueNotFoundError):
        jira_service.fetch_issue("BAD-1")


def test_search_by_query_sends_jql_bound_and_fields(jira_service, session):
    session.request.return_value = make_response(payload={
        "issues": [
            {"key": "ABC-1", "fields": {"comment": {"comments": [{"id": "1", "body": "hi"}], "total": 1}}},
            {"key": "ABC-2", "fields": {}},
        ],
    })

    issues = jira_service.search_by_query("text ~ TODO", 1000, ("summary", "comment"))

    params = session.request.call_args.kwargs["params"]
    assert params == {"jql": "text ~ TODO", "maxResults": 1000, "fields": "summary,comment"}
    assert [issue.key for issue in issues] == ["ABC-1", "ABC-2"]
    assert [c.body for c in issues[0].comments] == ["hi"]
    # Assert: without a self link the comments URL is derived from the key
    assert issues[1].comments_url == f"{BASE_URL}/rest/api/3/issue/ABC-2/comment"


def test_search_by_query_without_issues_is_empty(jira_service, session):
    session.request.return_value = make_response(payload={"issues": []})

    assert jira_service.search_by_query("project = NONE", 1000, ("comment",)) == []


#--------------------------- tests for comment operations --------------------------

def test_add_comment_posts_adf_body_to_comments_url(jira_service, session):
    comments_url = f"{BASE_URL}/rest/api/3/issue/10001/comment"
    session.request.return_value = make_response(201, payload={"id": "5", "self": f"{comments_url}/5", "body": "x"})

    created = jira_service.add_comment(comments_url, Comment(body="line one\nline two"))

    method, url = session.request.call_args.args
    body = session.request.call_args.kwargs["json"]["body"]
    assert (method, url) == ("POST", comments_url)
    assert body["type"] == "doc"
    assert len(body["content"]) == 2
    assert created.self_url == f"{comments_url}/5"


def test_update_comment_puts_to_self_url(jira_service, session):
    session.request.return_value = make_response(204)
    comment = Comment(body="new", self_url=f"{BASE_URL}/rest/api/3/issue/10001/comment/5", id="5")

    jira_service.update_comment(comment)

    assert session.request.call_args.args == ("PUT", comment.self_url)
    sent = session.request.call_args.kwargs["json"]["body"]
    assert sent["content"][0]["content"][0]["text"] == "new"


def test_delete_comment_deletes_self_url(jira_service, session):
    session.request.return_value = make_response(204)
    comment = Comment(body="old", self_url=f"{BASE_URL}/rest/api/3/issue/10001/comment/5")

    jira_service.delete_comment(comment)

    assert session.request.call_args.args == ("DELETE", comment.self_url)


def test_changing_unsaved_comment_is_rejected(jira_service, session):
    with pytest.raises(InvariantViolation):
        jira_service.update_comment(Comment(body="never created"))
    with pytest.raises(InvariantViolation):
        jira_service.delete_comment(Comment(body="never created"))
    session.request.assert_not_called()


#--------------------------- tests for error mapping --------------------------

def test_transport_error_becomes_remote_service_error(jira_service, session):
    session.request.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(RemoteServiceError) as excinfo:
        jira_service.fetch_issue("ABC-1")
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_invalid_json_becomes_remote_service_error(jira_service, session):
    response = make_response(payload={})
    response.json.side_effect = ValueError("Expecting value")
    session.request.return_value = response

    with pytest.raises(RemoteServiceError):
        jira_service.fetch_server_info()


def test_fetch_issue_with_empty_body_becomes_remote_service_error(jira_service, session):
    # Setup: 200 OK but no body at all
    session.request.return_value = make_response(200)

    with pytest.raises(RemoteServiceError) as excinfo:
        jira_service.fetch_issue("ABC-1")
    assert excinfo.value.status_code == 200


def test_fetch_issue_without_key_becomes_remote_service_error(jira_service, session):
    session.request.return_value = make_response(payload={"fields": {"summary": "no key"}})

    with pytest.raises(RemoteServiceError):
        jira_service.fetch_issue("ABC-1")


def test_fetch_server_info_non_object_becomes_remote_service_error(jira_service, session):
    session.request.return_value = make_response(payload=["not", "an", "object"])

    with pytest.raises(RemoteServiceError) as excinfo:
        jira_service.fetch_server_info()
    assert excinfo.value.status_code == 200


@pytest.mark.parametrize("payload", [
    ["not", "an", "object"],
    {"issues": "nope"},
    {"issues": [{"key": "ABC-1"}, "garbage"]},
    {"issues": [{"key": "ABC-1"}, {"fields": {}}]},
])
def test_search_by_query_malformed_page_fails_wholesale(jira_service, session, payload):
    session.request.return_value = make_response(payload=payload)

    with pytest.raises(RemoteServiceError):
        jira_service.search_by_query("project = ABC", 1000, ("comment",))


def test_raise_for_status_ok_response_does_not_raise():
    JiraService._raise_for_status(make_response(200))


def test_raise_for_status_500_raises_remote_service_error():
    # Setup: Simulate a 500 server error, json() returns error detail
    response = make_response(500, payload={"errorMessages": ["server error"]})

    with pytest.raises(RemoteServiceError) as excinfo:
        JiraService._raise_for_status(response)
    assert excinfo.value.status_code == 500
    assert not isinstance(excinfo.value, IssueNotFoundError)


def test_raise_for_status_falls_back_to_text_detail():
    response = make_response(401)
    response.json.side_effect = ValueError("not json")
    response.text = "Unauthorized"

    with pytest.raises(RemoteServiceError, match="Unauthorized"):
        JiraService._raise_for_status(response)
