"""Load an RVG table override from a JSON file"""

import json
import logging
from pathlib import Path

from mahnung_gateway.domain.exceptions import ConfigurationError
from mahnung_gateway.domain.fee_table import FeeTable, FeeTableRegistry, load_fee_table


def read_fee_table(path: Path) -> FeeTable:
    """
    Read a table stored as a JSON list of {"upper_bound": ..., "fee10": ...}.

    Numbers are parsed straight into Decimal so 51.5 is not routed through float.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            rows = json.load(fh, parse_float=str, parse_int=str)
    except OSError as e:
        raise ConfigurationError(f"Cannot read RVG table {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"RVG table {path} is not valid JSON: {e}") from e

    if not isinstance(rows, list):
        raise ConfigurationError(f"RVG table {path} must be a JSON list of rows")

    return load_fee_table(rows)


def install_fee_table(path: Path, registry: FeeTableRegistry) -> FeeTable:
    """Read, validate and atomically publish a table"""
    table = read_fee_table(path)
    registry.replace(table)
    logging.info("RVG table loaded", extra={"path": str(path), "rows": len(table)})
    return table
