from app.models.enums import ApproverRole
from app.review.approvers import (
    APPROVER_RULES,
    ResolvedApprover,
    RoleAssignment,
    approvers_for_role,
    resolve_approvers,
)

def ra(user_id, role_name) -> dict:
    return {"userId": user_id, "roleName": role_name}

def test_product_owner_resolves_to_po():
    assert resolve_approvers([ra("u1", "Product Owner")]) == [
        ResolvedApprover(role=ApproverRole.PO, user_id="u1", role_name="Product Owner")
    ]

def test_lead_programmer_resolves_to_lead():
    assert resolve_approvers([ra("u2", "Lead Programmer")]) == [
        ResolvedApprover(role=ApproverRole.LEAD, user_id="u2", role_name="Lead Programmer")
    ]

def test_leader_is_not_a_lead():
    assert resolve_approvers([ra("u3", "Programmer Leader")]) == []
    assert resolve_approvers([ra("u3", "Misleading Title")]) == []

def test_lead_po_yields_po_then_lead_for_same_user():
    out = resolve_approvers([ra("u4", "Lead PO")])
    assert [a.role for a in out] == [ApproverRole.PO, ApproverRole.LEAD]
    assert {a.user_id for a in out} == {"u4"}
    assert all(a.role_name == "Lead PO" for a in out)

def test_po_variants():
    for name in ["PO", "p.o.", "P.O", "product_owner", "Senior Product-Owner", "  po  "]:
        out = resolve_approvers([ra("u", name)])
        assert [a.role for a in out] == [ApproverRole.PO], name

def test_lead_variants():
    for name in ["lead", "LEAD", "Art Lead", "tech-lead", "lead_designer"]:
        out = resolve_approvers([ra("u", name)])
        assert [a.role for a in out] == [ApproverRole.LEAD], name

def test_missing_fields_are_skipped():
    assignments = [
        ra(None, "Product Owner"),
        ra("u1", None),
        ra("", "Lead"),
        ra("u2", ""),
        {"roleName": "Lead"},
        {"userId": "u3"},
        {},
    ]
    assert resolve_approvers(assignments) == []

def test_output_follows_input_order():
    out = resolve_approvers(
        [
            ra("a", "Lead Artist"),
            ra("b", "Composer"),
            ra("c", "Product Owner"),
            ra("d", "QA"),
            ra("e", "Lead"),
        ]
    )
    # "composer" contains "po", which the substring rule accepts
    assert [(a.user_id, a.role) for a in out] == [
        ("a", ApproverRole.LEAD),
        ("b", ApproverRole.PO),
        ("c", ApproverRole.PO),
        ("e", ApproverRole.LEAD),
    ]

def test_same_user_in_two_assignments_is_not_deduplicated():
    out = resolve_approvers([ra("u", "Product Owner"), ra("u", "PO")])
    assert len(out) == 2

def test_accepts_role_assignment_objects():
    out = resolve_approvers([RoleAssignment(user_id="u9", role_name="Art Lead")])
    assert out == [ResolvedApprover(role=ApproverRole.LEAD, user_id="u9", role_name="Art Lead")]

def test_input_is_not_mutated():
    assignments = [ra("u1", "  Lead_PO ")]
    resolve_approvers(assignments)
    assert assignments == [ra("u1", "  Lead_PO ")]

def test_rule_table_checks_po_first():
    assert [role for role, _ in APPROVER_RULES] == [ApproverRole.PO, ApproverRole.LEAD]

def test_approvers_for_role():
    out = resolve_approvers([ra("u1", "Lead PO"), ra("u2", "Lead")])
    assert [a.user_id for a in approvers_for_role(out, ApproverRole.LEAD)] == ["u1", "u2"]
    assert [a.user_id for a in approvers_for_role(out, ApproverRole.PO)] == ["u1"]
