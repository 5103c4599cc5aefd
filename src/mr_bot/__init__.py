"""
MR Bot (Slack Socket Mode + GitLab)

Where: long-running process connected to Slack over Socket Mode.
What:  Spot GitLab merge request links in messages, react, fetch each MR.
Why:   Lightweight review-request tracker without a public HTTP endpoint.
"""

__all__ = [
    "app",
    "config",
    "errors",
    "events",
    "gitlab",
    "handler",
    "idempotency",
    "logutil",
    "references",
    "slack",
]
