"""
atlasgen Advanced Example

Packs procedurally generated images from memory, inspects the placements
and the packer tree, then writes the atlases.
"""

import os
import random

from PIL import Image

from atlasgen import AtlasGenerator, ImageRecord

rng = random.Random(0)

# Build some sprites in memory
images = []
for i in range(60):
    size = (rng.randint(8, 96), rng.randint(8, 96))
    color = (rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255), 255)
    images.append(ImageRecord.from_image(f"sprites/sprite_{i:02d}", Image.new('RGBA', size, color)))

result = AtlasGenerator(256, 256).pack(images)

# Inspect placements
print("--- Placements ---")
for index, atlas in enumerate(result.atlases, start=1):
    print(f"Atlas {index}: {atlas}")
    for name, rect in atlas.manifest_entries()[:5]:
        print(f"  {name}: {rect}")
    print(f"  free leaves: {len(atlas.packer.free_leaves())}, nodes: {atlas.packer.node_count}")

# Stats
print("\n--- Stats ---")
print(result.get_stats())

# Save
os.makedirs("output", exist_ok=True)
report = result.save("output/sprites")
report.raise_for_failures()
print(f"\n✅ Wrote {len(report.written)} atlas(es) to output/")
