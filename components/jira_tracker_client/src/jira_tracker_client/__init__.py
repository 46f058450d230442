from jira_tracker_client.config import JiraConfig
from jira_tracker_client.jira_impl import JiraClient, get_client
from jira_tracker_client.jira_service import JiraService

__all__ = ["JiraClient", "JiraConfig", "JiraService", "get_client"]
