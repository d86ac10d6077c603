"""
Global configuration and constants for the Chemical Release Hazard Geometry Engine.
"""

# --- Physical Constants ---
GRAVITY = 9.81                  # m/s^2
KELVIN_OFFSET = 273.15          # degC -> K
MOLAR_VOLUME_L = 24.45          # L/mol of ideal gas at 25 degC, 1 atm (ppm <-> mg/m^3)
PPM_PER_PERCENT = 10000.0       # 1 % by volume = 10,000 ppm

# --- Wind ---
MIN_WIND_SPEED_MS = 0.5         # Floor applied before any division by wind speed

# --- Pasquill-Gifford Stability Classes ---
STABILITY_CLASSES = ("A", "B", "C", "D", "E", "F")   # Very unstable -> very stable
NEUTRAL_STABILITY_CLASS = "D"   # Fallback for unrecognised class symbols
STABLE_CLASSES = ("E", "F")     # Use the stable-atmosphere plume rise formula

# Briggs-style rural fits with x in kilometers, sigma in kilometers:
#   sigma = a * x_km^p   (rescaled to meters by the caller)
# Source: Turner (1970), ALOHA technical documentation
SIGMA_Y_COEFFICIENTS = {
    "A": 0.22,
    "B": 0.16,
    "C": 0.11,
    "D": 0.08,
    "E": 0.06,
    "F": 0.04,
}
SIGMA_Y_EXPONENT = 0.894        # Shared by every class

SIGMA_Z_COEFFICIENTS = {
    "A": 0.20,
    "B": 0.12,
    "C": 0.08,
    "D": 0.06,
    "E": 0.03,
    "F": 0.016,
}
SIGMA_Z_EXPONENTS = {
    "A": 0.92,
    "B": 0.92,
    "C": 0.78,
    "D": 0.78,
    "E": 0.67,
    "F": 0.67,
}
METERS_PER_KM = 1000.0

# --- Plume Rise (Briggs 1975) ---
DEFAULT_STACK_DIAMETER_M = 1.0   # Used when the scenario gives no stack diameter
DEFAULT_EXIT_VELOCITY_MS = 10.0  # Used when the scenario gives no exit velocity
BUOYANT_RISE_COEFF = 1.6         # Neutral/unstable buoyant rise multiplier
BUOYANT_RISE_DISTANCE_M = 100.0  # Reference distance in the 2/3-power term
STABLE_RISE_COEFF = 2.6          # Stable buoyant rise multiplier
STABLE_STABILITY_PARAM = 0.02    # s, stability parameter for classes E-F (1/s^2)
MOMENTUM_RISE_COEFF = 3.0        # Momentum-dominated rise: 3 * d * vs / u

# --- Unit Conversion ---
KG_TO_G = 1000.0                 # Emission rate kg/s -> g/s
G_M3_TO_MG_M3 = 1000.0           # Concentration g/m^3 -> mg/m^3 (output unit)

# --- Maximum Concentration Grid Search ---
# Pinned: expected threshold distances depend on these exact values.
MAX_SEARCH_START_M = 10.0        # First downwind distance scanned
MAX_SEARCH_END_M = 50000.0       # Last downwind distance scanned (inclusive)
MAX_SEARCH_RATIO = 1.1           # Geometric step between scanned distances
MAX_SEARCH_DEFAULT_DISTANCE_M = 100.0  # Reported when no sample exceeds zero

# --- Threshold Distance Bisection ---
THRESHOLD_SEARCH_MAX_M = 100000.0  # Upper bracket edge (100 km)
THRESHOLD_SEARCH_TOLERANCE_M = 10.0  # Stop once the bracket is this narrow

# --- Concentration Profile (charting) ---
PROFILE_NUM_POINTS = 50
PROFILE_START_M = 10.0
PROFILE_MAX_DISTANCE_M = 10000.0

# --- Hazard Zones ---
ZONE_NAMES = ("red", "orange", "yellow")   # Most to least severe
# Used directly as mg/m^3 when the chemical is unknown
DEFAULT_ZONE_THRESHOLDS = {
    "red": 100.0,      # AEGL-3 equivalent
    "orange": 50.0,    # AEGL-2 equivalent
    "yellow": 10.0,    # AEGL-1 equivalent
}
# Fraction of IDLH substituted when a tier is missing from a known chemical
IDLH_TIER_RATIOS = {
    "red": 1.0,
    "orange": 0.1,
    "yellow": 0.01,
}
ZONE_COLORS = {
    "red": "#dc2626",
    "orange": "#f97316",
    "yellow": "#facc15",
}
# Dose bands (mg/m^3 x minutes) rating exposure to chemicals without AEGLs
DOSE_SEVERITY_BANDS = (
    (1000.0, "fatal"),
    (500.0, "high"),
    (100.0, "medium"),
)

# --- Footprint Geometry ---
FOOTPRINT_NUM_POINTS = 72          # Angular samples around the ellipse
ASPECT_RATIO_MIN = 2.5
ASPECT_RATIO_MAX = 8.0
ASPECT_RATIO_WIND_SLOPE = 0.8      # aspect = clamp(u * slope + base, min, max)
ASPECT_RATIO_BASE = 2.0
FOOTPRINT_AXIS_SCALE = 0.5         # Semi-axes are half the nominal extents
LOW_WIND_THRESHOLD_MS = 2.0        # Below: widen plume
HIGH_WIND_THRESHOLD_MS = 7.0       # Above: narrow plume
LOW_WIND_WIDTH_FACTOR = 1.5
HIGH_WIND_WIDTH_FACTOR = 0.7
UPWIND_OFFSET_FRACTION = 0.8       # Ellipse centre shifted downwind by 0.8 * a
DOWNWIND_SPREAD_FACTOR = 0.3       # Extra crosswind width at the far end

# --- Wind Arrow ---
WIND_ARROW_LENGTH_M = 200.0
WIND_ARROW_WIDTH_M = 50.0

# --- Ground Touchdown ---
TOUCHDOWN_BASE_MULTIPLIER = 8.0    # distance = H_eff * (base + slope * u)
TOUCHDOWN_WIND_SLOPE = 1.5
TOUCHDOWN_MAX_FRACTION = 0.9       # Of the yellow-zone distance

# --- Flat-Earth Projection ---
METERS_PER_DEGREE_LAT = 111000.0   # Shared by footprint, arrow and touchdown

# --- Performance Monitoring ---
MONITOR_MAX_METRICS = 1000         # Oldest metrics are dropped beyond this
SLOW_OPERATION_MS = 100.0          # Operations slower than this are logged
