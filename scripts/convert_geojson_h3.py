"""
GeoJSON <-> H3 Datei-Converter
------------------------------
Konvertiert eine GeoJSON-Datei (Feature oder FeatureCollection mit
Polygon / MultiPolygon Geometrien) in eine Liste von H3-Zellen, oder eine
Liste von H3-Zellen zurueck in GeoJSON.

Richtungen:
  - to_cells:    GeoJSON -> JSON-Liste von H3-Zellen (feste Resolution)
  - to_geojson:  H3-Zellen (JSON-Liste oder eine Zelle pro Zeile) -> GeoJSON
                 output_format:
                   feature       Umriss(e) der Zellmenge inkl. Loecher
                   multipolygon  ein Ring pro Zelle, keine Verschmelzung
                   collection    ein Feature pro Zelle

Konfiguration:
  Beim Start wird config.yaml aus dem Projektverzeichnis geladen (oder der
  als erstes Argument uebergebene Pfad). Die Defaults werden angezeigt und
  der User kann sie akzeptieren [y] oder interaktiv ueberschreiben [n].

Verwendung:
  Aus dem Projektverzeichnis ausfuehren:
      python scripts/convert_geojson_h3.py [config.yaml]
"""

import json
import sys
import time
from pathlib import Path

import yaml

# Projektverzeichnis zum Importpfad hinzufuegen
sys.path.insert(0, str(Path(__file__).parent.parent))
from geojson_h3 import (
    ContainmentMode,
    GeoJSONH3Error,
    cells_to_feature,
    cells_to_feature_collection,
    cells_to_multipolygon_feature,
    feature_to_cells,
)


# ---------------------------------------------------------------------------
# Konstanten
# ---------------------------------------------------------------------------

# config.yaml liegt im Projektverzeichnis (Elternverzeichnis von scripts/)
CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"

VALID_DIRECTIONS = ("to_cells", "to_geojson")

VALID_CONTAINMENT_MODES: dict[str, ContainmentMode] = {
    m.value: m for m in ContainmentMode
}

OUTPUT_FORMATS = {
    "feature": cells_to_feature,
    "multipolygon": cells_to_multipolygon_feature,
    "collection": cells_to_feature_collection,
}


# ---------------------------------------------------------------------------
# Config laden
# ---------------------------------------------------------------------------


def load_config(path: Path) -> dict | None:
    """Liest config.yaml. Gibt None zurueck wenn die Datei nicht existiert."""
    if not path.exists():
        return None
    with open(path, "r") as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# Interaktive Eingabe
# ---------------------------------------------------------------------------


def _prompt_line(label: str) -> str:
    """Liest eine nicht-leere Zeile vom User."""
    while True:
        val = input(f"  {label}: ").strip()
        if val:
            return val
        print("    (nicht leer)")


def _prompt_choice(label: str, options: list[str]) -> str:
    """Fragt nach einem Wert aus einer festen Auswahl."""
    print(f"  {label} -- gueltige Optionen: {options}")
    while True:
        val = input("    Auswahl: ").strip().lower()
        if val in options:
            return val
        print(f"    Gueltige Optionen: {options}")


def prompt_int(label: str, min_val: int, max_val: int) -> int:
    """Fragt nach einem Integer innerhalb der Grenzen."""
    while True:
        raw = input(f"  {label}: ").strip()
        try:
            val = int(raw)
        except ValueError:
            print("    Ungueltige Eingabe -- bitte eine Ganzzahl.")
            continue
        if not min_val <= val <= max_val:
            print(f"    Bereich: {min_val}-{max_val}")
            continue
        return val


def collect_params_interactive() -> dict:
    """Sammelt alle Parameter interaktiv vom User."""
    print("\n" + "-" * 60)
    print("  Parameter interaktiv eingeben")
    print("-" * 60)

    config = {
        "direction": _prompt_choice("Richtung", list(VALID_DIRECTIONS)),
        "input_file": _prompt_line("Input-Datei"),
        "output_file": _prompt_line("Output-Datei"),
    }
    if config["direction"] == "to_cells":
        config["resolution"] = prompt_int("Resolution (0-15)", 0, 15)
        config["ensure_output"] = _prompt_choice("Centroid-Fallback", ["y", "n"]) == "y"
        config["containment_mode"] = _prompt_choice(
            "Containment-Modus", list(VALID_CONTAINMENT_MODES.keys())
        )
    else:
        config["output_format"] = _prompt_choice("Output-Format", list(OUTPUT_FORMATS.keys()))
    return config


# ---------------------------------------------------------------------------
# Anzeige + Validierung
# ---------------------------------------------------------------------------


def display_config(config: dict) -> None:
    """Gibt die Konfiguration formatiert aus."""
    print("\n" + "=" * 60)
    print("  Konfiguration")
    print("=" * 60)
    for key in ("direction", "input_file", "output_file", "resolution",
                "ensure_output", "containment_mode", "output_format"):
        if key in config:
            print(f"  {key + ':':20s}{config[key]}")
    print("=" * 60)


def validate_config(config: dict) -> list[str]:
    """Prueft die Konfiguration und gibt die Liste der Fehler zurueck."""
    errors: list[str] = []

    direction = config.get("direction")
    if direction not in VALID_DIRECTIONS:
        errors.append(f"Ungueltige direction: '{direction}'. Gueltig: {list(VALID_DIRECTIONS)}")

    if not config.get("input_file"):
        errors.append("Keine Input-Datei angegeben.")
    elif not Path(config["input_file"]).exists():
        errors.append(f"Input-Datei nicht gefunden: {config['input_file']}")

    if not config.get("output_file"):
        errors.append("Kein Output-Pfad angegeben.")

    if direction == "to_cells":
        resolution = config.get("resolution")
        if not isinstance(resolution, int) or not 0 <= resolution <= 15:
            errors.append(f"Ungueltige resolution: {resolution!r} (0-15)")
        mode = config.get("containment_mode", ContainmentMode.CENTER.value)
        if mode not in VALID_CONTAINMENT_MODES:
            errors.append(
                f"Ungueltiger containment_mode: '{mode}'. "
                f"Gueltig: {list(VALID_CONTAINMENT_MODES.keys())}"
            )

    if direction == "to_geojson":
        output_format = config.get("output_format", "feature")
        if output_format not in OUTPUT_FORMATS:
            errors.append(
                f"Ungueltiges output_format: '{output_format}'. Gueltig: {list(OUTPUT_FORMATS.keys())}"
            )

    return errors


# ---------------------------------------------------------------------------
# Hauptlogik
# ---------------------------------------------------------------------------


def read_cells(path: Path) -> list[str]:
    """Liest H3-Zellen als JSON-Liste oder eine Zelle pro Zeile."""
    text = path.read_text().strip()
    if text.startswith("["):
        return json.loads(text)
    return [line.strip() for line in text.splitlines() if line.strip()]


def run_conversion(config: dict) -> None:
    """Laden -- Konvertieren -- Speichern."""
    input_path = Path(config["input_file"])
    output_path = Path(config["output_file"])

    print(f"\n1. Lese: {input_path}")
    start = time.time()

    if config["direction"] == "to_cells":
        with open(input_path, "r") as f:
            geojson = json.load(f)
        resolution = config["resolution"]
        containment_mode = VALID_CONTAINMENT_MODES[
            config.get("containment_mode", ContainmentMode.CENTER.value)
        ]
        print(f"\n2. GeoJSON -> H3 (Res {resolution}, Modus {containment_mode.value})")
        result = feature_to_cells(
            geojson,
            resolution,
            ensure_output=bool(config.get("ensure_output", False)),
            containment_mode=containment_mode,
        )
        summary = f"{len(result):,} Cells"
    else:
        cells = read_cells(input_path)
        output_format = config.get("output_format", "feature")
        print(f"\n2. H3 -> GeoJSON ({len(cells):,} Cells, Format {output_format})")
        result = OUTPUT_FORMATS[output_format](cells)
        summary = f"Typ {result.get('geometry', result)['type']}"

    elapsed = time.time() - start
    print(f"   Konvertierung: {elapsed:.2f} s -> {summary}")

    print(f"\n3. Speichere: {output_path}")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(result, f)

    print("\n" + "=" * 60)
    print("  Fertig.")
    print("=" * 60)


# ---------------------------------------------------------------------------
# Entry-Point
# ---------------------------------------------------------------------------


def main():
    print("\n" + "=" * 60)
    print("  GeoJSON <-> H3 Converter")
    print("=" * 60)

    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else CONFIG_PATH
    config = load_config(config_path)

    if config:
        display_config(config)
        choice = input("\nConfig-Defaults verwenden? [y/n]: ").strip().lower()
        if choice != "y":
            config = collect_params_interactive()
    else:
        print(f"\n  Keine Konfiguration gefunden ({config_path})")
        print("  Parameter werden interaktiv eingegeben.")
        config = collect_params_interactive()

    errors = validate_config(config)
    if errors:
        print("\nFehler in der Konfiguration:")
        for e in errors:
            print(f"  - {e}")
        sys.exit(1)

    try:
        run_conversion(config)
    except GeoJSONH3Error as e:
        print(f"\nKonvertierung fehlgeschlagen: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
