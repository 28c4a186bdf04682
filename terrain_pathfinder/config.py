# config.py
# Fixed palette of the terrain maps. RGB triplets as stored in the raster data.
WATER_RGB = (158, 217, 246)
LEVEL_1_RGB = (203, 226, 163)
LEVEL_2_RGB = (255, 250, 188)
LEVEL_3_RGB = (251, 203, 114)
LEVEL_4_RGB = (222, 163, 83)
ROBOT_PATH_RGB = (255, 0, 0)
UNKNOWN_RGB = (0, 0, 0)  # render only, never matched

# Robot endpoints (row, col) on the reference terrain map
DEFAULT_START = (30, 2026)
DEFAULT_DESTINATION = (2030, 25)

API_HOST = "0.0.0.0"
API_PORT = 8081
