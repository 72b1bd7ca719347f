# transitplanner

Route planning for a city described by an OpenStreetMap extract and a bus
system given as CSV tables. It finds the best driving path between two map
nodes and the fastest multi-modal trip (walking, biking and riding the bus),
and writes results as CSV step lists and KML files that map viewers can
display.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `transitplanner.strutils`: string helpers `slice_text`, `capitalize`,
  `upper`, `lower`, `strip`, `lstrip`, `rstrip`, `center`, `ljust`, `rjust`,
  `replace`, `split`, `join`, `expand_tabs` and `edit_distance`.
- `transitplanner.datastreams`: character sources and sinks over strings,
  files and the standard streams (`StringDataSource`, `StringDataSink`,
  `FileDataSource`, `FileDataSink`, `StandardDataSource`,
  `StandardDataSink`, `StandardErrorDataSink`). It also has
  `FileDataFactory`, which opens sources and sinks by name inside a base
  directory and creates that directory when a sink is made.
- `transitplanner.dsv`: `DSVReader` (iterable, yields rows as lists of
  strings) and `DSVWriter` for delimiter-separated values with quoting.
- `transitplanner.geoutils`: haversine distance in miles, bearings,
  eight-point compass directions and degree/minute/second formatting.
- `transitplanner.xmlio`: `XMLReader` and `XMLWriter`, which read and write
  a document as a stream of `XMLEntity` values. Malformed input raises
  `XMLParseError`.
- `transitplanner.kml`: `KMLWriter` for point and line styles, point
  placemarks and paths. It can be used as a context manager, which closes
  the document on exit.
- `transitplanner.streetmap`: `OpenStreetMap`, which loads `Node` and `Way`
  objects from an OSM document.
- `transitplanner.bussystem`: `CSVBusSystem`, which loads `Stop` and `Route`
  objects from CSV tables and skips header rows and rows it cannot parse.
- `transitplanner.busindexer`: `BusSystemIndexer`, with stops sorted by ID,
  routes sorted by name, lookup of a stop by map node, and the routes that
  directly join two stops.
- `transitplanner.pathrouter`: `DijkstraPathRouter`, a general directed
  weighted graph of tagged vertices with shortest-path search.
- `transitplanner.planner`: `DijkstraTransportationPlanner`, set up with a
  `Configuration`:
  - `find_shortest_path` returns the best driving path. Edges are weighted by
    travel time at each way's `maxspeed`, or at the default speed limit when
    a way has none.
  - `find_fastest_path` returns a trip of `TripStep` values that starts on
    foot. It may switch between walking and biking at any node and may board
    buses at stops.
  - `get_path_description` turns a trip into readable lines.
  Unreachable destinations give an infinite cost and an empty path.
- `transitplanner.commandline`: `TransportationPlannerCommandLine`, a command
  loop over a planner with the commands `help`, `count`, `node`, `shortest`,
  `fastest`, `save`, `print` and `exit`/`quit`. `save [name]` writes
  `<name>.csv` and `<name>.kml` through the results factory. Without a name
  the files are called `<start>_<end>`.
- `transitplanner.kmlout`: the `kmlout` command, described below.

## Examples

```python
from transitplanner import geoutils, strutils

davis = (38.5449, -121.7405)
sacramento = (38.5816, -121.4944)

miles = geoutils.haversine_distance_miles(davis, sacramento)
heading = geoutils.bearing_to_direction(geoutils.calculate_bearing(davis, sacramento))
print(f"{miles:.1f} miles heading {heading}")
print(geoutils.convert_ll_to_dms(davis))

print(strutils.split("stop_id,node_id", ","))
print(strutils.edit_distance("Walk", "walk", True))
```

Reading CSV rows:

```python
from transitplanner.datastreams import StringDataSource
from transitplanner.dsv import DSVReader

reader = DSVReader(StringDataSource('stop_id,node_id\n1,1001\n"2",1002\n'), ",")
for row in reader:
    print(row)
```

Running the interactive planner on the standard streams:

```python
from transitplanner.bussystem import CSVBusSystem
from transitplanner.commandline import TransportationPlannerCommandLine
from transitplanner.datastreams import (
    FileDataFactory,
    StandardDataSink,
    StandardDataSource,
    StandardErrorDataSink,
)
from transitplanner.dsv import DSVReader
from transitplanner.planner import Configuration, DijkstraTransportationPlanner
from transitplanner.streetmap import OpenStreetMap
from transitplanner.xmlio import XMLReader

data = FileDataFactory("./data")
street_map = OpenStreetMap(XMLReader(data.create_source("city.osm")))
bus_system = CSVBusSystem(
    DSVReader(data.create_source("stops.csv"), ","),
    DSVReader(data.create_source("routes.csv"), ","),
)
config = Configuration(
    street_map=street_map,
    bus_system=bus_system,
    walk_speed=3.0,
    bike_speed=8.0,
    default_speed_limit=25.0,
    bus_stop_time=30.0 / 3600.0,
)
planner = DijkstraTransportationPlanner(config)
TransportationPlannerCommandLine(
    StandardDataSource(),
    StandardDataSink(),
    StandardErrorDataSink(),
    FileDataFactory("./results"),
    planner,
).process_commands()
```

## Turning saved paths into KML

The `kmlout` command converts path files into KML files. A path file is a CSV
file with `mode` and `node_id` columns, as written by the `save` command.

```
kmlout [--data=path | --results=path] file [file ...]
```

The data directory (default `./data`) must hold `city.osm`, `stops.csv` and
`buspaths.csv`:

- `stops.csv` has `stop_id` and `node_id` columns.
- `buspaths.csv` has `src_id`, `dest_id`, `routes` and `path` columns.

For every path file named on the command line, a `.kml` file with the same
base name is written next to it. The name of a path file must look like
`<start>_<end>_<rest>`. If the last part contains `hr`, the trip is labelled
as a fastest path; otherwise it is labelled as a shortest path. If no file is
named, the command prints the syntax line and exits with status 1.

## What it does not do

There is no installed command that starts the interactive planner. To use
`TransportationPlannerCommandLine`, build it in Python as in the example
above. The file names, speeds and bus stop time in that example are your
choice; the package does not fix them. The planner keeps everything in
memory and does not store maps or results anywhere except the CSV and KML
files that `save` and `kmlout` write.