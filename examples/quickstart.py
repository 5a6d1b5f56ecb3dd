"""
atlasgen Quick Start Example

Packs every image under images/ into 1024x1024 atlases.
"""

import os

from atlasgen import AtlasGenerator

os.makedirs("output", exist_ok=True)

gen = AtlasGenerator(1024, 1024)

print("Packing images/ ...")
result = gen.build("images")
report = result.save("output/atlas")

for png_path, txt_path in report.written:
    print(f"✅ Saved {png_path} and {txt_path}")

for skipped in result.skipped:
    print(f"⚠️  Skipped {skipped.path}: {skipped.reason}")

print(f"\nDone! {result.image_count} images on {len(result.atlases)} atlas(es).")
