# trafficsim

Simulation logic for city traffic: collision checks, the rules that decide
which vehicle waits for which, car and tram speed changes, traffic light
cycles, tram crossings and stations, saved traffic scenarios and a small
settings file. It is a plain library that does no rendering. You supply
positions, rotations and time steps, and it works out collisions, light states
and speeds.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `trafficsim.geometry`: immutable `Vector2`, `Vector3` and `Quat` types
  (X forward, Y right, Z up), with dot products, normalisation, projection,
  rotation and `Vector3.orientation_quat()`.
- `trafficsim.mathutil`: 2D tests such as `point_inside_triangle`,
  `point_inside_rectangle`, `point_inside_cone`, `point_inside_bounding_box`,
  the convex polygon test `polygons_intersect`, `signed_angle_cw`, and Bézier
  helpers `sample_bezier3`, `sample_bezier4` and `bezier_curve_length`.
- `trafficsim.collision`: `CollisionRectangle`, an upright box with a
  rectangular footprint. It provides `intersects`, `contains_point`,
  `intersects_triangle`, `corners()` and `edges()`. Negative dimensions are
  clamped to zero.
- `trafficsim.blocking`: `blocked_by`, `resolve_overlap`,
  `departure_blocked_by` and `blocked_by_point`. They decide whether one
  entity has to stop for another. An entity is any object with
  `collision_rectangle`, `future_collision_rectangle`, `move_direction`,
  `yielding` and, optionally, `waiting_to_depart`.
- `trafficsim.driving`: car rules. `car_next_speed` gives the speed for the
  next frame, `future_view_scale` the look-ahead. `anim_acceleration`,
  `anim_steering_angle` and `anim_wheel_rotation_speed` give animation values.
  `overtake_merge_points` and `overtake_custom_points` plan an overtake.
  `DriverCharacteristics` and `OvertakeSettings` hold the tunable values.
- `trafficsim.lights`: `TrafficLightState`, `VisualTrafficLight`,
  `TrafficLightGroup` and `IntersectionController`. Groups cycle red →
  red-yellow → green → yellow. The controller gives each group its green phase
  in turn. Groups activate their stop areas while not green and deactivate them
  while green. A stop area is any object with `activate()` and `deactivate()`.
- `trafficsim.tram`: `tram_next_speed`, `bounding_sphere_radius`,
  `tram_blocked_by` and `tram_blocked_by_point`, plus `TramLightArea` and
  `TramIntersectionController`. Together they turn crossing lights red while
  trams pass.
- `trafficsim.tram_stops`: `TramStationArea`, which slows trams down, holds
  them and then releases them, and `TramControlPoint`, which sets a tram's
  speed at once or after a delay. A tram is any object with
  `set_move_speed(speed)`, and delays advance through `tick(delta_time)`.
- `trafficsim.scenario_data`: `ScenarioData` and its car, pedestrian,
  intersection and player records, with a little-endian binary format
  (`to_bytes` / `from_bytes`). `ScenarioStore` saves and loads `<name>.sav`
  files in a directory, which defaults to
  `~/Documents/CiThruS2/Scenarios`. Malformed or empty files raise
  `ValueError`.
- `trafficsim.config`: `CithrusConfig`, an INI-backed `show_introduction`
  setting (default `True`) that is written to disk as soon as it is set.

## Examples

Collision rectangles:

```python
from trafficsim.geometry import Vector3, Quat
from trafficsim.collision import CollisionRectangle

a = CollisionRectangle(Vector3(500, 200, 150), Vector3(0, 0, 0), Quat.identity())
b = CollisionRectangle(Vector3(500, 200, 150), Vector3(300, 0, 0), Quat.identity())
print(a.intersects(b))  # True
```

Traffic lights:

```python
from trafficsim.lights import TrafficLightGroup, IntersectionController

north = TrafficLightGroup("north")
east = TrafficLightGroup("east")
crossing = IntersectionController([north, east])
crossing.begin_play()
for _ in range(100):
    north.tick(0.1)
    east.tick(0.1)
print(north.light_state, east.light_state)
```

Saving and loading a scenario:

```python
from trafficsim.geometry import Vector3
from trafficsim.scenario_data import CarScenarioData, ScenarioData, ScenarioStore

store = ScenarioStore("scenarios")
data = ScenarioData(scenario_name="rush_hour",
                    car_data=[CarScenarioData(location=Vector3(100, 0, 0))])
store.save(data)
loaded = store.load("rush_hour")
print(store.names())  # ['rush_hour.sav']
```

## What it does not do

The package has rules and state machines, but no simulation loop and no world.
It has no car, pedestrian or tram objects that move along road graphs, and no
stop, yield, parking or speed-regulation area classes. Light groups and the
blocking functions accept any objects that have the attributes listed above.
There are no time-of-day, weather or performance presets. The package provides
no command-line program.