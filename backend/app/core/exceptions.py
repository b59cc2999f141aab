class MilestoneTrackerError(Exception):
    """Base exception for the milestone tracker."""

    pass


class StageInUseError(MilestoneTrackerError):
    """Raised when deleting a stage that milestones still reference."""

    def __init__(self, stage_id: int, milestone_count: int):
        self.stage_id = stage_id
        self.milestone_count = milestone_count
        super().__init__(
            "Cannot delete this stage because it is used by one or more milestones"
        )


class InvalidUploadError(MilestoneTrackerError):
    """Raised when an uploaded file fails type or size validation."""

    pass
