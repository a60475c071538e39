"""
The `constants` module defines the mathematical and grid constants used by the geodetic conversions.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)


"""
Constant to convert arcseconds to radians. Equal to 2pi/(360*3600). Units: *rad/as*
"""
AS2RAD = 2.0 * PI / 360.0 / 3600.0

"""
Constant to convert radians to arcseconds. Equal to (360*3600)/(2pi). Units: *as/rad*
"""
RAD2AS = 360.0 * 3600.0 / PI / 2.0

"""
Constant to convert parts-per-million to a dimensionless ratio. Units: *1/ppm*
"""
PPM2RATIO = 1.0e-6

# Earth Constants
"""
Earth's semi-major axis as defined by the WGS84 geodetic system. [m]

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_a = 6378137.0  # WGS-84 semi-major axis

"""
Earth's semi-minor axis as defined by the WGS84 geodetic system. [m]

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_b = 6356752.314245  # WGS-84 semi-minor axis

"""
Earth's ellipsoidal flattening.  WGS84 Value.

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_f = 1.0 / 298.257223563  # WGS-84 flattening

# UTM Grid Constants
"""
UTM scale factor on the central meridian. [dimensionless]

References:

1. NGA Standardization Document NGA.SIG.0012, *The Universal Grids and the
Transverse Mercator and Polar Stereographic Map Projections*, 2014.
"""
UTM_K0 = 0.9996

"""
UTM false easting applied to every zone. [m]
"""
UTM_FALSE_EASTING = 500e3

"""
UTM false northing applied in the southern hemisphere. [m]
"""
UTM_FALSE_NORTHING = 10000e3

"""
Southern and northern latitude limits of the UTM grid. [deg]
"""
UTM_LAT_MIN = -80.0
UTM_LAT_MAX = 84.0

"""
Width of a UTM longitudinal zone. [deg]
"""
UTM_ZONE_WIDTH = 6.0

"""
MGRS latitude band letters, 8 deg tall from 80S; 0N is offset 10 into the
string and X is repeated so that 80-84N resolves to the taller X band.
"""
MGRS_LAT_BANDS = "CDEFGHJKLMNPQRSTUVWXX"
