# pipetally

pipetally counts round objects, such as pipe ends, in a photograph. It finds
circles with a gradient Hough transform over a Canny edge map. You can then
correct the count by hand. Add marks for objects the detector missed, and add
marks that cross out circles it found in error.

## Installation

```
pip install .
```

To install the test dependencies too, run `pip install .[test]`.

## Command line

The package installs a `pipetally` command:

```
pipetally bundle.jpg --plus 120,84 --minus 40,40 --overlay result.jpg
```

It reads the image, detects circles and prints four lines:

```
detected: <circles found>
plus: +<added marks>
minus: -<removed marks>
total: <detected + plus - minus>
```

Options:

- `--center-dist`, `--canny`, `--roundness`, `--min-radius`, `--max-radius`:
  detector settings. The defaults are 10, 100, 30, 15 and 50.
- `--plus X,Y`: add a missed object at image coordinates. You can repeat it.
- `--minus X,Y`: remove a false detection at image coordinates. You can repeat it.
- `--edges PATH`: write the edge map to PATH. The file extension sets the image format.
- `--overlay PATH`: write the annotated view to PATH as a JPEG.
- `--force`: overwrite output files that already exist. Without it the
  command stops if an output file exists.

If a mark is repeated, the command reports it on standard error and ignores it.
If the detector finds more than 1000 circles, the command reports it and
counts the detections as zero. The exit status is:

- 2 for invalid detector settings.
- 1 for an existing output file, an unreadable image or a failed write.
- 0 otherwise.

## Library use

### Detecting circles

```python
from pipetally.detection import HoughParams, detect_circles, edge_map, load_image

image = load_image("bundle.jpg")          # RGB uint8 array
circles = detect_circles(image, HoughParams(canny=120, min_radius=10))
edges = edge_map(image, 120)              # 0/255 uint8 grey image
```

`HoughParams` holds these settings:

- `center_dist`: the smallest distance allowed between two centres.
- `canny`: the upper edge threshold. The lower threshold is half of it.
- `roundness`: the number of accumulator votes a centre needs.
- `min_radius` and `max_radius`.

`HoughParams` raises `ValueError` for values that are out of range.

`detect_circles` returns `Circle` objects, strongest first. It raises
`TooManyCirclesError` if it finds more than 1000 circles, which usually means
the settings need adjusting.

`to_gray` converts an RGB(A) or grey array to an 8-bit grey image.

### Correcting the count

```python
from pipetally.tally import Tally

tally = Tally()
tally.set_detected(circles)     # Circle objects or (x, y, radius) tuples
tally.add_plus(120.0, 84.0)     # an object the detector missed
tally.add_minus(40.0, 40.0)     # a false detection
print(tally.detected_count(), tally.plus_count(), tally.minus_count())
print(tally.total())            # detected + plus - minus
tally.undo()                    # removes the most recent mark, returns its MarkKind
```

If you add a mark at the exact position of an existing mark of the same kind,
`Tally` raises `DuplicateMarkError`.

`crossed_out()` returns the detected circles that contain at least one minus
mark.

`clear()` removes all marks and detected circles. The detected count stays
as it was until you call `set_detected` again.

`display_scale(longest_side)` gives the factor that maps an image onto the
421-pixel view.

### Drawing the result

```python
from pipetally.overlay import render_overlay

picture = render_overlay(image, tally, 421)   # a PIL image
picture.save("result.jpg")
```

`render_overlay` scales the image so that its longer side equals the given
size, then draws:

- detected circles in red;
- plus marks as small green circles;
- minus marks as yellow crosses;
- each detected circle that holds a minus mark again in yellow.

`cross_polygon(x, y)` returns the outline of the cross used for a minus mark.

### Selecting a region

`pipetally.selection.RegionSelector` follows a press, move and release drag.
`release` returns a `Rect` only if the release point is more than `min_size`
pixels to the right of and below the press point. The default is 16. The
rectangle's corners are multiplied by `factor`, which defaults to 2. While a
drag is in progress, `label()` gives the size text, for example `"40x30"`.

### Login gate

```python
from pipetally.login import LoginGate, LoginResult

password = "password"
gate = LoginGate("operator", password, 3)
assert gate.attempt("operator", password) is LoginResult.SUCCESS
```

Empty and wrong attempts count as failures. Once the limit is reached,
`locked()` is true and any further `attempt` raises `LoginLockedError`.

## What it does not do

pipetally has no graphical window. You cannot click on the image to add
marks; pass coordinates with `--plus` and `--minus` or to `Tally`. It does not
capture images from a camera or the screen. `RegionSelector` only computes a
rectangle from pointer positions; it does not grab any pixels.