"""Example of batch processing coordinates with boundary-lookup."""

import sys

import pandas as pd
from boundary_lookup import BoundaryLookup

# Create sample data
df = pd.DataFrame(
    {
        "id": range(1, 6),
        "latitude": [-1.9441, -1.9706, -2.5967, -1.4995, 0.0],
        "longitude": [30.0619, 30.1044, 29.7394, 29.6347, 0.0],
    }
)

print("Input DataFrame:")
print(df)
print()

lookup = BoundaryLookup.from_file(sys.argv[1] if len(sys.argv) > 1 else "villages.geojson")

# Batch locate
print("Processing coordinates...")
output = lookup.locate_batch(df, progress=True)

print("\nResults:")
print(output[["id", "feature_id", "Province", "District", "Village"]])

# Summary statistics
matched = output["feature_index"].notna().sum()
print(f"\nMatch rate: {matched}/{len(df)} ({100*matched/len(df):.1f}%)")

# Save to file
# output.to_csv("located_coordinates.csv", index=False)
# output.to_parquet("located_coordinates.parquet")
