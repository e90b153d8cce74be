from dataclasses import dataclass, field


@dataclass
class ScoringConfig:
    """Relevance weights. Scores are additive and clamped to max_score."""
    title_base: float = 60.0
    tag_base: float = 50.0
    message_base: float = 40.0
    exact_match_bonus: float = 30.0
    tag_exact_match_bonus: float = 5.0
    position_bonus: float = 10.0
    position_decay_chars: int = 20
    recency_window_days: int = 10
    max_score: float = 100.0


@dataclass
class HighlightConfig:
    """Snippet window settings."""
    snippet_max_chars: int = 160
    ellipsis: str = "..."
    open_tag: str = "<mark>"
    close_tag: str = "</mark>"

    def __post_init__(self):
        # The window must hold both ellipses and at least one character
        minimum = 2 * len(self.ellipsis) + 1
        if self.snippet_max_chars < minimum:
            self.snippet_max_chars = minimum


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_dir: str | None = None
    enable_console: bool = True
    enable_syslog: bool = False


@dataclass
class SearchConfig:
    """Conversation search configuration."""
    max_results: int = 50
    context_lines: int = 2
    debounce_ms: int = 0
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    highlight: HighlightConfig = field(default_factory=HighlightConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        self.max_results = max(0, int(self.max_results))
        self.context_lines = max(0, int(self.context_lines))
        self.debounce_ms = max(0, int(self.debounce_ms))
