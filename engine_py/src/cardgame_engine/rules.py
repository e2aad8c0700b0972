"""
Game rule configuration and validation.
"""

from pydantic import BaseModel, Field, field_validator


class RuleConfig(BaseModel):
    """Configuration for game rules and timings."""

    min_players: int = Field(
        default=2,
        ge=2,
        le=4,
        description="Minimum number of players required to start"
    )
    max_players: int = Field(
        default=4,
        ge=2,
        le=4,
        description="Maximum number of players allowed"
    )
    cards_per_player: int = Field(
        default=7,
        ge=1,
        description="Cards dealt to each player at round start"
    )
    round_seconds: int = Field(
        default=180,
        ge=1,
        le=3600,
        description="Length of the round countdown in seconds"
    )
    starting_delay_ms: int = Field(
        default=1000,
        ge=0,
        description="Delay between round start and the deal"
    )
    turn_delay_ms: int = Field(
        default=500,
        ge=0,
        description="Pause between turns before the next player may act"
    )
    ending_delay_ms: int = Field(
        default=2000,
        ge=0,
        description="Pause on the scoring screen before game over"
    )
    auto_resolve_delay_ms: int = Field(
        default=0,
        ge=0,
        description="Delay before a single-card or no-card turn is resolved automatically"
    )
    tick_interval_ms: int = Field(
        default=1000,
        ge=1,
        description="Wall-clock length of one countdown second"
    )
    notification_limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of auto-play/auto-skip notifications kept"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players doesn't fall below minimum."""
        min_players = info.data.get('min_players', 2)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v

    @field_validator('cards_per_player')
    @classmethod
    def validate_cards_per_player(cls, v):
        """A full table must leave at least one card for the discard pile."""
        from .constants import DECK_SIZE

        if v * 4 >= DECK_SIZE:
            raise ValueError(f'cards_per_player ({v}) leaves no card to start the discard pile')
        return v

    def validate_player_count(self, player_count: int) -> bool:
        """Check if a player count is valid for this configuration."""
        return self.min_players <= player_count <= self.max_players


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
