from enum import Enum


class ScenarioTypes(str, Enum):
    CASE_CREATED = "case_created"
    CASE_STATUS_UPDATED = "case_status_updated"
    CASE_CLOSED = "case_closed"
    DECISION_MADE = "decision_made"
    TASK_ASSIGNED = "task_assigned"
    MESSAGE_RECEIVED = "message_received"
    NOT_IMPLEMENTED = "not_implemented"
