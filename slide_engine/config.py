import dataclasses


@dataclasses.dataclass(slots=True)
class NavigationConfig:
    """Timing and input thresholds for slide navigation."""

    fade_out_delay: float = 0.2  # seconds between hiding the old and showing the new section
    settle_delay: float = 0.3  # seconds the lock stays held after the new section appears
    swipe_threshold: float = 50.0  # minimum horizontal travel of a swipe, in CSS pixels
    advance_zone: float = 0.65  # clicks right of this viewport fraction advance
    retreat_zone: float = 0.35  # clicks left of this viewport fraction retreat
    debug: bool = False

    def validate(self) -> None:
        if self.fade_out_delay < 0:
            raise ValueError("fade_out_delay cannot be negative")
        if self.settle_delay < 0:
            raise ValueError("settle_delay cannot be negative")
        if self.swipe_threshold <= 0:
            raise ValueError("swipe_threshold must be positive")
        if not 0 <= self.retreat_zone < self.advance_zone <= 1:
            raise ValueError(
                "click zones must satisfy 0 <= retreat_zone < advance_zone <= 1"
            )

    @property
    def transition_seconds(self) -> float:
        """Total time a transition holds the navigation lock."""
        return self.fade_out_delay + self.settle_delay
