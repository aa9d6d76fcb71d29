"""
Column mapping from an arbitrary CSV header onto the business schema.

Expected columns default to the business listing export layout and can be
overridden from a YAML file.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

import yaml

EXPECTED_COLUMNS: Tuple[str, ...] = (
    "name",
    "site",
    "subtypes",
    "category",
    "type",
    "phone",
    "full_address",
    "street",
    "city",
    "postal_code",
    "state",
    "us_state",
    "country_code",
    "latitude",
    "longitude",
    "rating",
    "reviews",
    "reviews_link",
    "photos_count",
    "photo",
    "street_view",
    "working_hours",
    "working_hours_old_format",
    "business_status",
    "about",
    "logo",
    "owner_link",
    "location_link",
    "location_reviews_link",
    "place_id",
)


def create_column_mapping(
    headers: Sequence[str],
    expected_columns: Iterable[str] = EXPECTED_COLUMNS,
) -> Dict[str, int]:
    """
    Map each expected column to its index in the header row.

    Matching is case-insensitive and exact; the first matching header wins.
    Expected columns with no match are left out of the mapping.

    Args:
        headers: Header row as parsed from the file
        expected_columns: Logical column names to resolve

    Returns:
        Dictionary of logical column name -> zero-based header index
    """
    lowered = [header.lower() for header in headers]
    column_map: Dict[str, int] = {}

    for column in expected_columns:
        try:
            column_map[column] = lowered.index(column.lower())
        except ValueError:
            continue

    return column_map


class ColumnConfigLoader:
    """
    Loads the expected column list from a YAML file.

    Expected YAML format:
    ```yaml
    columns:
      - name
      - phone
      - city
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the column config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Column configuration file not found: {config_path}")

    def load_columns(self) -> List[str]:
        """
        Load the expected column names.

        Returns:
            Column names in file order, duplicates removed

        Raises:
            ValueError: If the YAML is invalid or has no usable columns
        """
        with open(self.config_path) as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(config, dict) or "columns" not in config:
            raise ValueError("Column configuration must contain a 'columns' key")

        columns = config["columns"]
        if not isinstance(columns, list) or not columns:
            raise ValueError("'columns' must be a non-empty list")

        loaded: List[str] = []
        for column in columns:
            if not isinstance(column, str) or not column.strip():
                raise ValueError(f"Invalid column name: {column!r}")
            column = column.strip()
            if column not in loaded:
                loaded.append(column)

        return loaded
