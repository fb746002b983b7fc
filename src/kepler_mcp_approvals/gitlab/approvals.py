"""Merge request approvals API.

GitLab API docs: https://docs.gitlab.com/ee/api/merge_request_approvals.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kepler_mcp_approvals.gitlab.models import (
    ApproveMergeRequestOptions,
    ChangeMergeRequestAllowedApproversOptions,
    ChangeMergeRequestApprovalConfigurationOptions,
    MergeRequest,
    MergeRequestApprovals,
    ProjectMergeRequestApprovalSettings,
)
from kepler_mcp_approvals.logging_config import get_logger

if TYPE_CHECKING:
    from kepler_mcp_approvals.gitlab.client import GitLabClient

logger = get_logger(__name__)


class MergeRequestApprovalsService:
    """Reads and updates merge request approvals and approval settings.

    Project identifiers may be a numeric ID or a path such as
    "mygroup/myproject". Errors raised by the client are not caught here.
    """

    def __init__(self, client: GitLabClient) -> None:
        self._client = client

    def _mr_path(self, project_id: str | int, merge_request_iid: int, action: str) -> str:
        encoded_id = self._client.encode_project_id(project_id)
        return f"/projects/{encoded_id}/merge_requests/{merge_request_iid}/{action}"

    async def approve_merge_request(
        self,
        project_id: str | int,
        merge_request_iid: int,
        options: ApproveMergeRequestOptions | None = None,
    ) -> MergeRequestApprovals:
        """Approve a merge request.

        Args:
            project_id: Project ID or path
            merge_request_iid: Merge request internal ID
            options: Optional ``sha`` that must match the HEAD of the MR

        Returns:
            Approval state after approving
        """
        logger.debug("Approving merge request !%d in %s", merge_request_iid, project_id)
        body = options.to_body() if options else None
        result = await self._client.post(
            self._mr_path(project_id, merge_request_iid, "approve"),
            json_data=body,
        )
        return MergeRequestApprovals.model_validate(result)

    async def unapprove_merge_request(
        self,
        project_id: str | int,
        merge_request_iid: int,
    ) -> None:
        """Withdraw the current user's approval of a merge request."""
        logger.debug("Unapproving merge request !%d in %s", merge_request_iid, project_id)
        await self._client.post(self._mr_path(project_id, merge_request_iid, "unapprove"))

    async def get_merge_request_approvals(
        self,
        project_id: str | int,
        merge_request_iid: int,
    ) -> MergeRequestApprovals:
        """Get the approval state of a merge request."""
        logger.debug(
            "Getting approvals of merge request !%d in %s", merge_request_iid, project_id
        )
        result = await self._client.get(
            self._mr_path(project_id, merge_request_iid, "approvals")
        )
        return MergeRequestApprovals.model_validate(result)

    async def change_approval_configuration(
        self,
        project_id: str | int,
        merge_request_iid: int,
        options: ChangeMergeRequestApprovalConfigurationOptions,
    ) -> MergeRequest:
        """Change the number of approvals a merge request requires.

        Args:
            project_id: Project ID or path
            merge_request_iid: Merge request internal ID
            options: New ``approvals_required`` value

        Returns:
            The updated merge request
        """
        logger.debug(
            "Changing approval configuration of !%d in %s", merge_request_iid, project_id
        )
        result = await self._client.post(
            self._mr_path(project_id, merge_request_iid, "approvals"),
            json_data=options.to_body(),
        )
        return MergeRequest.model_validate(result)

    async def change_allowed_approvers(
        self,
        project_id: str | int,
        merge_request_iid: int,
        options: ChangeMergeRequestAllowedApproversOptions,
    ) -> MergeRequest:
        """Replace the users and groups allowed to approve a merge request.

        An empty list is sent as-is and clears that set of approvers.
        """
        logger.debug("Changing allowed approvers of !%d in %s", merge_request_iid, project_id)
        result = await self._client.put(
            self._mr_path(project_id, merge_request_iid, "approvers"),
            json_data=options.to_body(),
        )
        return MergeRequest.model_validate(result)

    async def get_project_approval_configuration(
        self,
        project_id: str | int,
    ) -> MergeRequestApprovals:
        """Get the project-level approval configuration."""
        logger.debug("Getting project approval configuration of %s", project_id)
        encoded_id = self._client.encode_project_id(project_id)
        result = await self._client.get(f"/projects/{encoded_id}/approvals")
        return MergeRequestApprovals.model_validate(result)

    async def change_project_approval_configuration(
        self,
        project_id: str | int,
        settings: ProjectMergeRequestApprovalSettings,
    ) -> MergeRequestApprovals:
        """Update the project-level approval configuration.

        Args:
            project_id: Project ID or path
            settings: Settings to change; unset fields keep their value

        Returns:
            The project approval configuration after the change
        """
        logger.debug("Changing project approval configuration of %s", project_id)
        encoded_id = self._client.encode_project_id(project_id)
        result = await self._client.post(
            f"/projects/{encoded_id}/approvals",
            json_data=settings.to_body(),
        )
        return MergeRequestApprovals.model_validate(result)
