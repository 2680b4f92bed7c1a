"""Basic example of using boundary-lookup."""

import sys

from boundary_lookup import BoundaryLookup, format_dms

# Build the lookup from a village boundary dataset with NAME_0..NAME_5 and
# ID_0..ID_5 attributes (GeoJSON, shapefile, GeoPackage or GeoParquet)
path = sys.argv[1] if len(sys.argv) > 1 else "villages.geojson"
lookup = BoundaryLookup.from_file(path)

# Coordinate lookup
print("=" * 60)
print("Coordinate Lookup")
print("=" * 60)

text = "1°57'00.0\"S 30°03'36.0\"E"
result = lookup.locate_text(text)

if result.is_matched:
    print(f"Input: {text}")
    print(f"Location: {format_dms(result.latitude, result.longitude)}")
    print(f"Feature ID: {result.feature_id} ({result.id_path})")
    for level, name in result.names.items():
        print(f"  {level}: {name}")
else:
    print(f"No unit found for: {text}")
    print(f"Match type: {result.match_type}")

# Name search, restricted to Cells with the ":cell" shorthand
print("\n" + "=" * 60)
print("Search")
print("=" * 60)

results = lookup.search(":cell kigali")
for entry in results.name_matches:
    print(f"{entry.name} ({entry.parents_label}) - {entry.feature_count} villages")

if results.entries:
    chosen = results[0]
    stats = lookup.region_stats(chosen)
    print(f"\n{chosen.name}: {dict(stats.rows(chosen.level))}")
    print(f"Bounds: {lookup.entry_bounds(chosen)}")

    # Keys are stable, so a saved selection can be restored later
    restored = lookup.entry(chosen.key)
    print(f"Restored from key: {restored.key}")
