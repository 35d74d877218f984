"""
Benchmark: GeoJSON <-> H3 Konvertierung
---------------------------------------
Misst die Laufzeit der oeffentlichen Konvertierungsfunktionen auf
synthetischen Zellmengen:

  - ring50:        gefuellte Scheibe mit k=50 um eine Zelle
  - ring30Donut:   gefuellte Scheibe k<10 als Insel im Loch eines
                   Rings k=20..29 (Umriss mit Loch und Insel)

Verwendung:
  Aus dem Projektverzeichnis ausfuehren:
      python scripts/benchmark_conversion.py [wiederholungen]
"""

import sys
import time
from pathlib import Path

import h3

# Projektverzeichnis zum Importpfad hinzufuegen
sys.path.insert(0, str(Path(__file__).parent.parent))
from geojson_h3 import cells_to_feature, feature_to_cells

CENTER_CELL = "89283080ddbffff"
RESOLUTION = 9
DEFAULT_REPEATS = 5


def build_fixtures() -> dict[str, list[str]]:
    """Erzeugt die Zellmengen fuer den Benchmark."""
    ring50 = h3.grid_disk(CENTER_CELL, 50)
    # Insel im Loch ist erlaubt, ein zweiter Donut darum herum nicht
    ring30_donut = [
        cell
        for k in range(0, 30)
        if k < 10 or k >= 20
        for cell in h3.grid_ring(CENTER_CELL, k)
    ]
    return {"ring50": ring50, "ring30Donut": ring30_donut}


def time_call(label: str, fn, repeats: int) -> None:
    """Fuehrt fn mehrfach aus und gibt Mittel/Minimum aus."""
    timings = []
    for _ in range(repeats):
        start = time.perf_counter()
        fn()
        timings.append(time.perf_counter() - start)
    mean_ms = sum(timings) / len(timings) * 1000
    print(f"  {label:40s} mean {mean_ms:8.1f} ms | min {min(timings) * 1000:8.1f} ms")


def main():
    repeats = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_REPEATS

    print("\n" + "=" * 60)
    print(f"  GeoJSON <-> H3 Benchmark ({repeats} Wiederholungen)")
    print("=" * 60)

    fixtures = build_fixtures()
    features = {name: cells_to_feature(cells) for name, cells in fixtures.items()}

    for name, cells in fixtures.items():
        time_call(f"cells_to_feature - {name}", lambda: cells_to_feature(cells), repeats)

    for name, feature in features.items():
        time_call(f"feature_to_cells - {name}", lambda: feature_to_cells(feature, RESOLUTION), repeats)


if __name__ == "__main__":
    main()
