"""
Yard layout parameters for the digital-twin scene (scene units, y is up).

Dimensions follow the dashboard's reference yard: a 100x100 ground plane,
a 60-unit dock slab on the water side and container rows inland.
"""

# Ground plane
GROUND_SIZE = (100.0, 0.0, 100.0)
GROUND_COLOR = "#1a1f3a"

# Dock slab (centre position; height 1 so the top sits at y=1)
DOCK_SIZE = (60.0, 1.0, 20.0)
DOCK_CENTER_Y = 0.5
DOCK_LINE_Z = -15.0
DOCK_COLOR = "#252b48"

# Quay cranes along the dock line
CRANE_OFFSETS = (-20.0, -10.0, 0.0, 10.0, 20.0)
CRANE_BASE_SIZE = (3.0, 1.0, 3.0)
CRANE_BASE_Y = 0.5
CRANE_BASE_COLOR = "#667eea"
CRANE_POLE_SIZE = (0.8, 15.0, 0.8)
CRANE_POLE_Y = 8.0
CRANE_POLE_COLOR = "#764ba2"
CRANE_BEAM_SIZE = (12.0, 0.6, 0.6)
CRANE_BEAM_Y = 15.0
CRANE_BEAM_COLOR = "#f093fb"
CRANE_PARTS = 3

# Container stacks on a regular (x, z) lattice
CONTAINER_SIZE = (6.0, 2.5, 2.5)
CONTAINER_PALETTE = ("#43e97b", "#f5576c", "#4facfe", "#feca57", "#667eea")
LATTICE_X = (-25.0, 25.0)
LATTICE_Z = (5.0, 15.0)
LATTICE_STRIDE = 8.0
STACK_HEIGHT_RANGE = (1, 3)

# Environment (not part of the node list)
BACKGROUND_COLOR = "#0a0e27"
FOG_NEAR = 50.0
FOG_FAR = 200.0
AMBIENT_LIGHT = ("#ffffff", 1.2)
DIRECTIONAL_LIGHT = ("#ffffff", 1.5, (20.0, 30.0, 10.0))
SHADOW_EXTENT = 50.0
GRID_SIZE = 100.0
GRID_DIVISIONS = 50
GRID_COLORS = ("#667eea", "#252b48")

# Camera
CAMERA_FOV_DEG = 60.0
CAMERA_NEAR = 0.1
CAMERA_FAR = 1000.0
CAMERA_DEFAULT_POSITION = (30.0, 25.0, 30.0)
CAMERA_ORBIT_RADIUS = 40.0
CAMERA_ORBIT_RATE = 0.0001  # radians per millisecond of wall-clock time
