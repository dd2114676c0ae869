"""Resolve PO / Lead approvers from a project's role assignments.

Role names are free text ("Product Owner", "p.o.", "Lead Programmer"), so
resolution is a fixed, ordered table of match rules. Each assignment is
checked against every rule in table order and contributes one approver per
matching rule. An assignment matching both rules ("Lead PO") yields two
approvers for the same user; that is kept as-is.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from app.models.enums import ApproverRole
from app.review.roles import normalize_role_name

PO_ROLE_HINTS: tuple[str, ...] = ("po", "product owner")
LEAD_ROLE_HINTS: tuple[str, ...] = ("lead",)

@dataclass(frozen=True)
class RoleAssignment:
    user_id: str | None
    role_name: str | None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "RoleAssignment":
        # project settings store camelCase keys
        return cls(user_id=raw.get("userId"), role_name=raw.get("roleName"))

@dataclass(frozen=True)
class ResolvedApprover:
    role: ApproverRole
    user_id: str
    role_name: str

def _matches_po(normalized: str) -> bool:
    # substring match also covers "senior product owner", "po / qa"
    undotted = normalized.replace(".", "")
    return any(
        normalized == hint or hint in normalized or undotted == hint
        for hint in PO_ROLE_HINTS
    )

def _matches_lead(normalized: str) -> bool:
    # whole word at either end only: "leader" and "misleading" don't count
    return any(
        normalized == hint or normalized.endswith(f" {hint}") or normalized.startswith(f"{hint} ")
        for hint in LEAD_ROLE_HINTS
    )

APPROVER_RULES: tuple[tuple[ApproverRole, Callable[[str], bool]], ...] = (
    (ApproverRole.PO, _matches_po),
    (ApproverRole.LEAD, _matches_lead),
)

def _coerce(item: RoleAssignment | Mapping[str, Any]) -> RoleAssignment:
    if isinstance(item, RoleAssignment):
        return item
    return RoleAssignment.from_mapping(item)

def resolve_approvers(
    assignments: Iterable[RoleAssignment | Mapping[str, Any]],
) -> list[ResolvedApprover]:
    approvers: list[ResolvedApprover] = []

    for item in assignments:
        ra = _coerce(item)
        if not ra.user_id or not ra.role_name:
            continue

        normalized = normalize_role_name(ra.role_name)
        for role, matches in APPROVER_RULES:
            if matches(normalized):
                approvers.append(ResolvedApprover(role=role, user_id=ra.user_id, role_name=ra.role_name))

    return approvers

def approvers_for_role(approvers: Iterable[ResolvedApprover], role: ApproverRole) -> list[ResolvedApprover]:
    return [a for a in approvers if a.role == role]
