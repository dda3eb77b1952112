"""
Runtime Configuration

Settings come from LIBRARY_* environment variables, with defaults suited to
a local single-node install.
"""
import os
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Mapping, Optional

from constants import LoanPolicy
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

APP_DIR = Path.home() / ".library-lending"
DEFAULT_DB_PATH = APP_DIR / "library.db"
DEFAULT_LOG_DIR = APP_DIR / "logs"


def _env_flag(env: Mapping[str, str], key: str, default: bool = False) -> bool:
    """
    Read a boolean flag.

    Returns:
        True if the variable is 'true', '1' or 'yes' (case-insensitive)
    """
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in ('true', '1', 'yes')


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_dir: Path
    log_level: str = "INFO"
    default_loan_days: int = LoanPolicy.STANDARD_LOAN_DAYS
    daily_overdue_fee: Decimal = Decimal(LoanPolicy.DAILY_OVERDUE_FEE)
    sql_echo: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Raises:
        ConfigurationError: If a numeric value cannot be parsed or is out of range
    """
    env = os.environ if env is None else env
    invalid = []

    database_url = env.get('LIBRARY_DATABASE_URL') or f"sqlite:///{DEFAULT_DB_PATH}"
    log_dir = Path(env.get('LIBRARY_LOG_DIR') or DEFAULT_LOG_DIR)

    log_level = (env.get('LIBRARY_LOG_LEVEL') or "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        invalid.append('LIBRARY_LOG_LEVEL')

    loan_days = LoanPolicy.STANDARD_LOAN_DAYS
    raw_days = env.get('LIBRARY_DEFAULT_LOAN_DAYS')
    if raw_days:
        try:
            loan_days = int(raw_days)
        except ValueError:
            invalid.append('LIBRARY_DEFAULT_LOAN_DAYS')
        else:
            if not LoanPolicy.min_period() <= loan_days <= LoanPolicy.max_period():
                invalid.append('LIBRARY_DEFAULT_LOAN_DAYS')

    fee = Decimal(LoanPolicy.DAILY_OVERDUE_FEE)
    raw_fee = env.get('LIBRARY_DAILY_OVERDUE_FEE')
    if raw_fee:
        try:
            fee = Decimal(raw_fee)
        except InvalidOperation:
            invalid.append('LIBRARY_DAILY_OVERDUE_FEE')
        else:
            if not fee.is_finite() or fee < 0:
                invalid.append('LIBRARY_DAILY_OVERDUE_FEE')

    if invalid:
        raise ConfigurationError(f"Invalid configuration values: {', '.join(invalid)}", invalid)

    settings = Settings(
        database_url=database_url,
        log_dir=log_dir,
        log_level=log_level,
        default_loan_days=loan_days,
        daily_overdue_fee=fee,
        sql_echo=_env_flag(env, 'LIBRARY_SQL_ECHO'),
    )
    logger.debug(f"Loaded settings: database={'sqlite' if settings.is_sqlite else 'external'}, "
                 f"loan_days={settings.default_loan_days}")
    return settings
