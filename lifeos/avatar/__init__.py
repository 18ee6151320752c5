"""Avatar package: rule table, state engine and alerts."""

from lifeos.avatar.alerts import ALERT_CHECKS, generate_alerts, overspend_percent
from lifeos.avatar.engine import STATUS_MESSAGES, calculate_avatar_state, status_for_score
from lifeos.avatar.rules import AVATAR_RULES, AvatarRule

__all__ = [
    "ALERT_CHECKS",
    "AVATAR_RULES",
    "AvatarRule",
    "STATUS_MESSAGES",
    "calculate_avatar_state",
    "generate_alerts",
    "overspend_percent",
    "status_for_score",
]
