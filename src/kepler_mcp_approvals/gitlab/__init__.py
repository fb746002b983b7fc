"""GitLab API client and merge request approvals service."""

from kepler_mcp_approvals.gitlab.approvals import MergeRequestApprovalsService
from kepler_mcp_approvals.gitlab.client import GitLabClient
from kepler_mcp_approvals.gitlab.exceptions import (
    GitLabAPIError,
    GitLabAuthenticationError,
    GitLabConflictError,
    GitLabForbiddenError,
    GitLabNotFoundError,
    GitLabRateLimitError,
    GitLabValidationError,
)
from kepler_mcp_approvals.gitlab.models import (
    ApproveMergeRequestOptions,
    ApproverGroupDetails,
    BasicUser,
    ChangeMergeRequestAllowedApproversOptions,
    ChangeMergeRequestApprovalConfigurationOptions,
    MergeRequest,
    MergeRequestApprovals,
    MergeRequestApproverGroup,
    MergeRequestApproverUser,
    ProjectMergeRequestApprovalSettings,
)

__all__ = [
    "ApproveMergeRequestOptions",
    "ApproverGroupDetails",
    "BasicUser",
    "ChangeMergeRequestAllowedApproversOptions",
    "ChangeMergeRequestApprovalConfigurationOptions",
    "GitLabAPIError",
    "GitLabAuthenticationError",
    "GitLabClient",
    "GitLabConflictError",
    "GitLabForbiddenError",
    "GitLabNotFoundError",
    "GitLabRateLimitError",
    "GitLabValidationError",
    "MergeRequest",
    "MergeRequestApprovals",
    "MergeRequestApprovalsService",
    "MergeRequestApproverGroup",
    "MergeRequestApproverUser",
    "ProjectMergeRequestApprovalSettings",
]
