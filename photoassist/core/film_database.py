"""Film database service — loads film reciprocity data from JSON.

The database file is a JSON array of film entries:

    {"id": "ilford_hp5_plus", "name": "Ilford HP5 Plus", "iso": 400,
     "model": {"type": "powerLaw", "factor": 1.31, "cutoffTime": 1.0}}

Malformed entries are logged and skipped; the remaining films still load.
"""

import json
import logging
import pathlib

from photoassist.core.serializers import dict_to_film
from photoassist.models.exposure import FilmReciprocity

logger = logging.getLogger(__name__)


def _is_unsorted(entry: dict) -> bool:
    points = entry["model"].get("dataPoints") or []
    metered = [float(p["metered"]) for p in points]
    return any(b < a for a, b in zip(metered, metered[1:]))


class FilmDatabase:
    """Film stock lookup by ID.

    Args:
        data_path: Path to the films JSON file. If *None*, the bundled
            ``photoassist/data/films.json`` is used.
    """

    def __init__(self, data_path: str | pathlib.Path | None = None) -> None:
        if data_path is None:
            data_path = pathlib.Path(__file__).resolve().parents[1] / "data" / "films.json"
        self._path = pathlib.Path(data_path)
        self._films: dict[str, FilmReciprocity] = {}
        self._load()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_films(self) -> list[FilmReciprocity]:
        """Return all loaded films in file order."""
        return list(self._films.values())

    def get_film(self, film_id: str) -> FilmReciprocity:
        """Return a single film by ID.

        Raises:
            KeyError: If *film_id* is not found.
        """
        try:
            return self._films[film_id]
        except KeyError:
            raise KeyError(f"Unknown film: {film_id!r}")

    def has_film(self, film_id: str) -> bool:
        return film_id in self._films

    def __len__(self) -> int:
        return len(self._films)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load(self) -> None:
        """Load and parse the films JSON file."""
        if not self._path.exists():
            logger.warning("Film database not found: %s", self._path)
            return
        try:
            with open(self._path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError):
            logger.exception("Failed to read film database %s", self._path)
            return
        if not isinstance(raw, list):
            logger.warning("Film database %s is not a JSON array", self._path)
            return

        for index, entry in enumerate(raw):
            try:
                film = dict_to_film(entry)
            except (KeyError, ValueError, TypeError, AttributeError) as exc:
                logger.warning("Skipping malformed film entry %d: %r", index, exc)
                continue
            if _is_unsorted(entry):
                logger.warning("Film %s: reciprocity points not sorted, reordered", film.id)
            if film.id in self._films:
                logger.warning("Duplicate film id %s, keeping the later entry", film.id)
            self._films[film.id] = film

        logger.info("Loaded %d films from %s", len(self._films), self._path.name)
