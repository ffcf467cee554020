# meshscan

Building blocks for working with triangle meshes and laser-profile scan data.

## Modules

- `meshscan.stl` reads ASCII and binary STL files into an `StlMesh`
  (`read_stl_file`, `read_stl_ascii`, `read_stl_binary`,
  `stl_file_has_ascii_format`, or `StlMesh.from_file`). Equal vertex
  coordinates are merged, triangles that become degenerate are dropped and
  the triangle ranges of each solid are kept. Failures raise `StlReadError`.
- `meshscan.kdtree` holds `Vector3`, `Triangle`, `BoundingBox` and `KDNode`.
  `bounding_box` spans the first corner of each triangle, and
  `build_kd_node` splits triangles into a k-d tree at the mean triangle
  midpoint, stopping below depth 10.
- `meshscan.planefit` fits a plane through 3-D points by SVD and returns its
  unit normal (`FitPlane3D.build`, `fit_plane_normal`).
- `meshscan.crack` lays out the control points of a crack defect:
  `CrackLayout.from_point_count` spaces points evenly, `length_text` and
  `width_text` give comma separated text, `polyline` gives drawing
  coordinates, and `parse_distribution` reads such text back (unreadable
  entries become 0).
- `meshscan.rotations` has a `Quaternion` with `normalized` and `slerp`,
  and `to_euler_angles`, which returns roll, pitch and yaw in degrees.
- `meshscan.rawimage` writes and reads the `IMG_INFO` raw matrix format
  (`write_mat_raw`, `read_mat_raw`, `RawImageError`). `read_mat_raw`
  returns a list with one array per record in the file.
- `meshscan.trajio` saves scan profiles (`save_data`), writes trajectory XML
  in a complete or a single-step form (`save_trajectory`), reads complete
  files back into a `TrajectoryRecord` (`load_trajectory`), parses bracketed
  number lists (`parse_vector`, `parse_vector_compact`) and writes one value
  per line (`write_values`).
- `meshscan.curves` has cubic B-spline sampling (`bspline_basis_matrix`,
  `interpolate_bspline`) and small helpers: `find_most_similar_value`,
  `find_local_extrema` and `is_point_in_volume`.

## Install

```
pip install .
```

## Example

```python
from meshscan.stl import StlMesh
from meshscan.planefit import fit_plane_normal

mesh = StlMesh.from_file("part.stl")
print(mesh.num_tris(), "triangles in", mesh.num_solids(), "solid(s)")

corners = [mesh.tri_corner_coords(0, c) for c in range(3)]
print("normal of first triangle's plane:", fit_plane_normal(corners))
```

Writing and reading a raw image:

```python
import numpy as np
from meshscan.rawimage import write_mat_raw, read_mat_raw

write_mat_raw("scan.raw", "w", np.zeros((4, 8)))
(image,) = read_mat_raw("scan.raw")
```

## What it does not do

The package is a library of parts. It has no command-line program and no
graphical interface. It does not simulate the sensor itself: it casts no
rays against a mesh, produces no scan profiles of its own, and inserts no
defects into meshes. It also offers no helper for choosing the working
distance of a generated trajectory.

## Tests

```
pip install ".[test]"
pytest
```