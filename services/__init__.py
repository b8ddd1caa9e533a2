from .session_service import (
    ScanReconciliation,
    SessionSetup,
    apply_scan,
    create_session,
    persist_aliases,
    reassign_participant,
    reconcile_scan,
    update_participant_handicap,
    update_participant_tee,
)

__all__ = [
    "ScanReconciliation",
    "SessionSetup",
    "apply_scan",
    "create_session",
    "persist_aliases",
    "reassign_participant",
    "reconcile_scan",
    "update_participant_handicap",
    "update_participant_tee",
]
