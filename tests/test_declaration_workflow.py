import pytest

from assetdesk.db.models.declarations import DeclarationStatus
from assetdesk.features.declarations import workflow


def test_creation_always_starts_pending_without_comment():
    fields = workflow.creation_fields(
        {"issue_title": "Écran noir", "description": "Plus d'affichage", "status": "approved", "admin_comment": "x"}
    )

    assert fields == {
        "issue_title": "Écran noir",
        "description": "Plus d'affichage",
        "status": DeclarationStatus.pending,
        "admin_comment": None,
    }


def test_employer_changes_ignore_status_and_comment():
    changes = workflow.employer_changes({"description": "Toujours en panne", "status": "approved", "admin_comment": "ok"})

    assert changes == {"description": "Toujours en panne"}


def test_employer_changes_reject_an_empty_title():
    with pytest.raises(workflow.WorkflowError) as exc:
        workflow.employer_changes({"issue_title": "  "})
    assert exc.value.field == "issue_title"


def test_admin_changes_ignore_content_fields():
    changes = workflow.admin_changes({"issue_title": "nouveau", "status": "resolved", "admin_comment": "remplacé"})

    assert changes == {"status": DeclarationStatus.resolved, "admin_comment": "remplacé"}


@pytest.mark.parametrize("value", ["closed", "", None, "APPROVED"])
def test_admin_changes_reject_unknown_status(value):
    with pytest.raises(workflow.WorkflowError):
        workflow.admin_changes({"status": value})


@pytest.mark.parametrize("value", ["approved", "rejected"])
def test_process_accepts_approved_and_rejected(value):
    changes = workflow.process_changes({"status": value})

    assert changes == {"status": DeclarationStatus(value), "admin_comment": None}


@pytest.mark.parametrize("value", ["resolved", "pending"])
def test_process_refuses_other_statuses(value):
    with pytest.raises(workflow.WorkflowError) as exc:
        workflow.process_changes({"status": value})
    assert exc.value.field == "status"


def test_filter_whitelist_leaves_resolved_out():
    assert workflow.filter_status("pending") is DeclarationStatus.pending
    assert workflow.filter_status("resolved") is None
    assert workflow.filter_status("nonsense") is None
    assert workflow.filter_status(None) is None


def test_messages_carry_the_resulting_status():
    assert workflow.update_message({"status": DeclarationStatus.approved}) == (
        "Declaration status has been updated to approved successfully"
    )
    assert workflow.update_message({"admin_comment": "vu"}) == "Declaration updated successfully"
    assert workflow.process_message(DeclarationStatus.rejected) == "Declaration has been rejected successfully"
