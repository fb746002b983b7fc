"""Typed records for the merge request approvals API.

Response models mirror the JSON GitLab returns and ignore fields they do
not know about. Option models are request bodies; unset fields are left
out of the serialized body so the server keeps its current value.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class GitLabModel(BaseModel):
    """Base for records decoded from GitLab responses."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_list_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        # GitLab sends null for empty approver and label lists
        if value is None and info.field_name is not None:
            field = cls.model_fields.get(info.field_name)
            if field is not None and field.default_factory is list:
                return []
        return value


class BasicUser(GitLabModel):
    """Minimal user representation embedded in other resources."""

    id: int | None = None
    username: str | None = None
    name: str | None = None
    state: str | None = None
    avatar_url: str | None = None
    web_url: str | None = None
    created_at: datetime | None = None


class ApproverGroupDetails(GitLabModel):
    id: int | None = None
    name: str | None = None
    path: str | None = None
    description: str | None = None
    visibility: str | None = None
    avatar_url: str | None = None
    web_url: str | None = None
    full_name: str | None = None
    full_path: str | None = None
    lfs_enabled: bool | None = None
    request_access_enabled: bool | None = None


class MergeRequestApproverGroup(GitLabModel):
    """Group allowed to approve, as nested under ``approver_groups``."""

    group: ApproverGroupDetails | None = None


class MergeRequestApproverUser(GitLabModel):
    """User entry in ``approved_by`` or ``approvers``."""

    user: BasicUser | None = None


class MergeRequestApprovals(GitLabModel):
    """Approval state of a merge request.

    GitLab returns the same shape for the project-level approval
    configuration, with the project flags filled in and the merge request
    fields left out.
    """

    id: int | None = None
    iid: int | None = None
    project_id: int | None = None
    title: str | None = None
    description: str | None = None
    state: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    merge_status: str | None = None
    approved: bool | None = None
    approvals_before_merge: int | None = None
    approvals_required: int | None = None
    approvals_left: int | None = None
    approved_by: list[MergeRequestApproverUser] = Field(default_factory=list)
    approvers: list[MergeRequestApproverUser] = Field(default_factory=list)
    approver_groups: list[MergeRequestApproverGroup] = Field(default_factory=list)
    suggested_approvers: list[BasicUser] = Field(default_factory=list)

    # Project-level configuration flags
    reset_approvals_on_push: bool | None = None
    disable_overriding_approvers_per_merge_request: bool | None = None
    merge_requests_author_approval: bool | None = None
    merge_requests_disable_committers_approval: bool | None = None

    @property
    def approver_usernames(self) -> list[str]:
        """Usernames of the users that have approved so far."""
        return [
            entry.user.username
            for entry in self.approved_by
            if entry.user is not None and entry.user.username
        ]


class MergeRequest(GitLabModel):
    """Merge request as returned by the approval configuration endpoints."""

    id: int | None = None
    iid: int | None = None
    project_id: int | None = None
    title: str | None = None
    description: str | None = None
    state: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    merged_at: datetime | None = None
    closed_at: datetime | None = None
    target_branch: str | None = None
    source_branch: str | None = None
    author: BasicUser | None = None
    assignee: BasicUser | None = None
    assignees: list[BasicUser] = Field(default_factory=list)
    source_project_id: int | None = None
    target_project_id: int | None = None
    labels: list[str] = Field(default_factory=list)
    draft: bool | None = None
    work_in_progress: bool | None = None
    merge_status: str | None = None
    sha: str | None = None
    merge_commit_sha: str | None = None
    user_notes_count: int | None = None
    approvals_before_merge: int | None = None
    web_url: str | None = None


class RequestOptions(BaseModel):
    """Base for request bodies sent to GitLab."""

    model_config = ConfigDict(extra="forbid")

    def to_body(self) -> dict[str, Any]:
        """Serialize to a JSON body, leaving out unset options."""
        return self.model_dump(mode="json", exclude_none=True)


class ApproveMergeRequestOptions(RequestOptions):
    """Options for approving a merge request.

    When ``sha`` is given it must match the HEAD of the merge request,
    otherwise GitLab refuses the approval.
    """

    sha: str | None = None


class ChangeMergeRequestApprovalConfigurationOptions(RequestOptions):
    approvals_required: int | None = None


class ChangeMergeRequestAllowedApproversOptions(RequestOptions):
    approver_ids: list[int] | None = None
    approver_group_ids: list[int] | None = None


class ProjectMergeRequestApprovalSettings(RequestOptions):
    """Project-level approval settings."""

    approvals_before_merge: int | None = None
    disable_overriding_approvers_per_merge_request: bool | None = None
    merge_requests_author_approval: bool | None = None
    merge_requests_disable_committers_approval: bool | None = None
    reset_approvals_on_push: bool | None = None
