from .constants import (
    Category, GOALKEEPER, POSITIONS, POSITION_CATEGORIES, POSITION_ABBREVIATIONS,
    STATUSES, SCHEDULABLE_STATUSES,
    normalize_name, normalize_pos, parse_categories, position_group, category_label,
)
from .models import (
    AvailabilityStatus, Player, Settings, PeriodAssignment, PlayerTracking,
    PlayerStats, LineupEvent, BuildReport,
)
from .errors import LineupError, PreconditionError, CriticalAlgorithmFailure
from .roster import Roster
from .grid import LineupGrid
from .history import LineupHistory
from .config import DEFAULT_CONFIG, load_settings, load_formations_yaml, settings_for_formation
from .csv_io import parse_roster_csv, roster_to_dataframe
from .validation import validate_all_rules, validate_lineup_quality, preference_compliance
from .stats import calculate_player_stats, stats_dashboard_df
from .engine import build_complete_lineup, auto_fill_all, auto_fill_period
