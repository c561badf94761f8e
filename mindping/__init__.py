"""Mind Ping core library: reflection store, streaks, questions, achievements.

Public API re-exports for convenient imports:
    from mindping import JournalApp, longest_streak, question_for, ...
"""

# Workspace & paths
from mindping.workspace import (
    workspace_root,
    reflections_path,
    achievements_path,
    preferences_path,
    log_path,
)

# File I/O
from mindping.fileio import (
    read_json,
    read_yaml,
    write_json_atomic,
    write_yaml_atomic,
)

# Models
from mindping.models import (
    Reflection,
    Achievement,
    Preferences,
    JournalSummary,
)

# Engines
from mindping.store import ReflectionStore
from mindping.streaks import longest_streak, current_streak
from mindping.questions import PROMPTS, question_for
from mindping.achievements import (
    CATALOG,
    POSITIVE_EMOJIS,
    STICKY_IDS,
    all_locked,
    recompute,
    mark_unlocked,
)
from mindping.analytics import compute_summary, distinct_emojis, month_badges
from mindping.preferences import (
    load_preferences,
    save_preferences,
    update_preferences,
    validate_preferences,
)

# Facade
from mindping.app import JournalApp
