#This file is for development purposes only

import logging
import sys

from jira_tracker_client import get_client
from tracker_client_interface import Comment, TrackerClientError


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    client = get_client(interactive=True)

    try:
        info = client.get_server_info()
        print(f"Connected to {info.server_title or info.base_url} (Jira {info.version})")
    except TrackerClientError as e:
        print(f"Error connecting to Jira: {e}")
        return 1

    jql = sys.argv[1] if len(sys.argv) > 1 else "project IS NOT EMPTY ORDER BY updated DESC"
    print(f"\nSearching: {jql}")
    try:
        issues = client.search_issues(jql)
    except TrackerClientError as e:
        print(f"Error searching Jira: {e}")
        return 1

    for issue in issues[:5]:
        print(f"- {issue} {client.get_view_url(issue)} ({len(issue.comments)} comments)")

    # Only logged unless JIRA_WRITE_ENABLED=true
    if issues:
        client.add_comment(issues[0], Comment(body="Hello from the TODO bot!"))
    return 0

if __name__ == "__main__":
    sys.exit(main())
