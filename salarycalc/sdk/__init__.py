"""Salary Calc SDK - Core functionality for net pay and employer cost."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    validate_settings,
    get_defaults,
    Settings,
    ConfigError,
    DEFAULT_REGION,
    DEFAULT_MUNICIPALITY,
    DEFAULT_MANUAL_MUNICIPAL_RATE,
)

from .schemas import (
    TaxBracket,
    RegionalRule,
    MunicipalRule,
    ProvincialCapital,
    IncentiveType,
    IncentiveCandidate,
    EmployeeProfile,
    SalaryResult,
    EmployerCostResult,
    ScenarioResult,
)

from .jurisdictions import (
    JurisdictionRegistry,
    JurisdictionDataError,
    default_registry,
    load_registry,
)

from .incentives import (
    INCENTIVE_RULES,
    SOUTH_REGIONS,
    is_south,
)

from .engine import (
    calculate_salary,
    calculate_employer_cost,
    simulate_scenario,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "validate_settings",
    "get_defaults",
    "Settings",
    "ConfigError",
    "DEFAULT_REGION",
    "DEFAULT_MUNICIPALITY",
    "DEFAULT_MANUAL_MUNICIPAL_RATE",
    # Schemas
    "TaxBracket",
    "RegionalRule",
    "MunicipalRule",
    "ProvincialCapital",
    "IncentiveType",
    "IncentiveCandidate",
    "EmployeeProfile",
    "SalaryResult",
    "EmployerCostResult",
    "ScenarioResult",
    # Jurisdictions
    "JurisdictionRegistry",
    "JurisdictionDataError",
    "default_registry",
    "load_registry",
    # Incentives
    "INCENTIVE_RULES",
    "SOUTH_REGIONS",
    "is_south",
    # Engine
    "calculate_salary",
    "calculate_employer_cost",
    "simulate_scenario",
]
