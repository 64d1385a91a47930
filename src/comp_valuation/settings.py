"""
Centralized Valuation Settings

Defaults used when a caller does not supply a value explicitly.
"""


class ValuationSettings:
    """
    Valuation defaults.

    The engine's business constants (clamp bounds, age curve coefficients)
    live on the stage classes. Only caller-facing defaults and calibration
    parameters are kept here.
    """

    # ================================================================
    # CALLER DEFAULTS
    # ================================================================

    DEFAULT_INFLATION_PERCENT = 4.0
    # Annual market inflation applied to reference contract values

    DEFAULT_PRESENT_YEAR = 2025
    # Year that reference values are present-valued to

    DEFAULT_POSITION = "1B"
    # Position profile used when the subject has no position code

    # ================================================================
    # CALIBRATION PARAMETERS
    # ================================================================
    # Carried over unchanged from the tool's baseball calibration.
    # Revisit both before pointing the engine at another sport.

    NEAR_ZERO_EPSILON = 0.001
    # Cohort (or subject) values below this are treated as zero

    BIPOLAR_TYPICAL_RANGE = 10.0
    # Expected spread of bipolar categories such as DEF and BsR
