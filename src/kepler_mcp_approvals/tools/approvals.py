"""GitLab merge request approval tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kepler_mcp_approvals.context import get_auth_method, get_gitlab_client
from kepler_mcp_approvals.gitlab.approvals import MergeRequestApprovalsService
from kepler_mcp_approvals.gitlab.models import (
    ApproveMergeRequestOptions,
    ChangeMergeRequestAllowedApproversOptions,
    ChangeMergeRequestApprovalConfigurationOptions,
    ProjectMergeRequestApprovalSettings,
)
from kepler_mcp_approvals.logging_config import get_logger

if TYPE_CHECKING:
    from pydantic import BaseModel

    from kepler_mcp_approvals.config import Config

logger = get_logger(__name__)


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", exclude_none=True)


def register_approval_tools(app: Any, config: Config) -> None:
    """Register merge request approval tools.

    Args:
        app: FastMCP application instance
        config: Application configuration
    """

    @app.tool()
    async def approve_merge_request(
        project_id: str,
        merge_request_iid: int,
        sha: str | None = None,
    ) -> dict[str, Any]:
        """Approve a merge request.

        Args:
            project_id: Project ID or path (e.g., "mygroup/myproject")
            merge_request_iid: Merge request internal ID (the ! number)
            sha: Expected HEAD SHA of the source branch; the approval is
                refused if the merge request has moved on

        Returns:
            Approval state with approvals_required, approvals_left, approved_by, etc.
        """
        async with get_gitlab_client(config) as client:
            result = await MergeRequestApprovalsService(client).approve_merge_request(
                project_id,
                merge_request_iid,
                ApproveMergeRequestOptions(sha=sha),
            )
        return _dump(result)

    @app.tool()
    async def unapprove_merge_request(
        project_id: str,
        merge_request_iid: int,
    ) -> dict[str, Any]:
        """Remove your approval from a merge request.

        Args:
            project_id: Project ID or path (e.g., "mygroup/myproject")
            merge_request_iid: Merge request internal ID (the ! number)

        Returns:
            Confirmation object
        """
        async with get_gitlab_client(config) as client:
            await MergeRequestApprovalsService(client).unapprove_merge_request(
                project_id, merge_request_iid
            )
        return {
            "status": "unapproved",
            "project_id": project_id,
            "merge_request_iid": merge_request_iid,
        }

    @app.tool()
    async def get_merge_request_approvals(
        project_id: str,
        merge_request_iid: int,
    ) -> dict[str, Any]:
        """Get the approval state of a merge request.

        Args:
            project_id: Project ID or path (e.g., "mygroup/myproject")
            merge_request_iid: Merge request internal ID (the ! number)

        Returns:
            Approval state including approvers, approver groups and who approved
        """
        async with get_gitlab_client(config) as client:
            result = await MergeRequestApprovalsService(client).get_merge_request_approvals(
                project_id, merge_request_iid
            )
        return _dump(result)

    @app.tool()
    async def change_merge_request_approval_configuration(
        project_id: str,
        merge_request_iid: int,
        approvals_required: int,
    ) -> dict[str, Any]:
        """Change how many approvals a merge request requires.

        Args:
            project_id: Project ID or path (e.g., "mygroup/myproject")
            merge_request_iid: Merge request internal ID (the ! number)
            approvals_required: Number of approvals required before merge

        Returns:
            Updated merge request object
        """
        async with get_gitlab_client(config) as client:
            result = await MergeRequestApprovalsService(client).change_approval_configuration(
                project_id,
                merge_request_iid,
                ChangeMergeRequestApprovalConfigurationOptions(
                    approvals_required=approvals_required
                ),
            )
        return _dump(result)

    @app.tool()
    async def change_merge_request_allowed_approvers(
        project_id: str,
        merge_request_iid: int,
        approver_ids: list[int] | None = None,
        approver_group_ids: list[int] | None = None,
    ) -> dict[str, Any]:
        """Change the users and groups allowed to approve a merge request.

        Args:
            project_id: Project ID or path (e.g., "mygroup/myproject")
            merge_request_iid: Merge request internal ID (the ! number)
            approver_ids: User IDs allowed to approve (replaces existing, [] clears)
            approver_group_ids: Group IDs allowed to approve (replaces existing, [] clears)

        Returns:
            Updated merge request object
        """
        async with get_gitlab_client(config) as client:
            result = await MergeRequestApprovalsService(client).change_allowed_approvers(
                project_id,
                merge_request_iid,
                ChangeMergeRequestAllowedApproversOptions(
                    approver_ids=approver_ids,
                    approver_group_ids=approver_group_ids,
                ),
            )
        return _dump(result)

    @app.tool()
    async def get_project_approval_configuration(project_id: str) -> dict[str, Any]:
        """Get the project-level merge request approval settings.

        Args:
            project_id: Project ID or path (e.g., "mygroup/myproject")

        Returns:
            Approval configuration with approvals_before_merge and the
            reset/override/author/committer approval flags
        """
        async with get_gitlab_client(config) as client:
            result = await MergeRequestApprovalsService(
                client
            ).get_project_approval_configuration(project_id)
        return _dump(result)

    @app.tool()
    async def change_project_approval_configuration(
        project_id: str,
        approvals_before_merge: int | None = None,
        reset_approvals_on_push: bool | None = None,
        disable_overriding_approvers_per_merge_request: bool | None = None,
        merge_requests_author_approval: bool | None = None,
        merge_requests_disable_committers_approval: bool | None = None,
    ) -> dict[str, Any]:
        """Change the project-level merge request approval settings.

        Only the settings that are passed are changed.

        Args:
            project_id: Project ID or path (e.g., "mygroup/myproject")
            approvals_before_merge: Approvals required before merge
            reset_approvals_on_push: Drop approvals when new commits are pushed
            disable_overriding_approvers_per_merge_request: Prevent changing
                approvers on individual merge requests
            merge_requests_author_approval: Allow authors to approve their own MRs
            merge_requests_disable_committers_approval: Prevent committers
                from approving MRs they contributed to

        Returns:
            Project approval configuration after the change
        """
        settings = ProjectMergeRequestApprovalSettings(
            approvals_before_merge=approvals_before_merge,
            reset_approvals_on_push=reset_approvals_on_push,
            disable_overriding_approvers_per_merge_request=(
                disable_overriding_approvers_per_merge_request
            ),
            merge_requests_author_approval=merge_requests_author_approval,
            merge_requests_disable_committers_approval=(
                merge_requests_disable_committers_approval
            ),
        )
        async with get_gitlab_client(config) as client:
            result = await MergeRequestApprovalsService(
                client
            ).change_project_approval_configuration(project_id, settings)
        return _dump(result)

    @app.tool()
    def get_gitlab_config() -> dict[str, str]:
        """Get the current GitLab configuration (non-sensitive info only).

        Returns:
            Dictionary with gitlab_url and auth_method
        """
        return {
            "gitlab_url": config.gitlab_url,
            "auth_method": get_auth_method(config),
        }

    logger.debug("Approval tools registered")
