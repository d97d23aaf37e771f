"""Write sample movies and people to workbooks and read them back.

Demonstrates declared sheet names, explicit sheet names and display-name
columns. Output files are created under the given directory.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import ClassVar

from excel_io import ExcelConverter, column, load_excel_io_settings
from excel_io.logging import get_logger, setup_logging

logger = get_logger(__name__)

MOVIES_SHEET = "movie"


@dataclass
class Movie:
    """Movie row; written to an explicit sheet in this example."""

    sheet_name: ClassVar[str] = "Movies Sheet"
    title: str = column("Title", default="")
    director: str = column("Director", default="")
    release_year: int = column("Release Year", default=0)
    genre: str = column("Genre", default="")


@dataclass
class Person:
    """Person row on the "People Sheet" sheet."""

    sheet_name: ClassVar[str] = "People Sheet"
    eye_colour: str = column("Eye Colour", default="")
    age: int = column("Age", default=0)
    height: int = column("Height", default=0)


def sample_movies() -> list[Movie]:
    """Return the sample movie list."""
    return [
        Movie("The Shawshank Redemption", "Frank Darabont", 1994, "Drama"),
        Movie("The Godfather", "Francis Ford Coppola", 1972, "Crime"),
        Movie("The Dark Knight", "Christopher Nolan", 2008, "Action"),
        Movie("Pulp Fiction", "Quentin Tarantino", 1994, "Crime"),
        Movie("The Lord of the Rings: The Return of the King", "Peter Jackson", 2003, "Fantasy"),
        Movie("Forrest Gump", "Robert Zemeckis", 1994, "Drama"),
        Movie("Inception", "Christopher Nolan", 2010, "Sci-Fi"),
        Movie("Fight Club", "David Fincher", 1999, "Drama"),
        Movie("The Matrix", "Lana Wachowski, Lilly Wachowski", 1999, "Sci-Fi"),
        Movie("Goodfellas", "Martin Scorsese", 1990, "Crime"),
    ]


def random_people(count: int, seed: int) -> list[Person]:
    """Generate people with random eye colours, ages and heights."""
    rng = random.Random(seed)
    colours = ["Blue", "Brown", "Green", "Grey", "Hazel"]
    return [
        Person(
            eye_colour=rng.choice(colours),
            age=rng.randint(1, 99),
            height=rng.randint(100, 199),
        )
        for _ in range(count)
    ]


def run_example(output_dir: Path, converter: ExcelConverter) -> dict[str, int]:
    """Write and re-read the sample workbooks.

    Args:
        output_dir: Directory that receives movie.xlsx and people.xlsx.
        converter: Converter to use.

    Returns:
        Number of records read back per workbook file name.
    """
    movie_path = output_dir / "movie.xlsx"
    converter.write(sample_movies(), movie_path, MOVIES_SHEET)
    movies = converter.read(Movie, movie_path, MOVIES_SHEET)
    for movie in movies:
        logger.info("%s", asdict(movie), extra={"sheet": MOVIES_SHEET})

    people_path = output_dir / "people.xlsx"
    converter.write(random_people(10, seed=7), people_path)
    people = converter.read(Person, people_path)
    for person in people:
        logger.info("%s : %d : %d", person.eye_colour, person.age, person.height)

    return {movie_path.name: len(movies), people_path.name: len(people)}


def main() -> int:
    """Entry point for script."""
    settings = load_excel_io_settings()
    setup_logging(
        level=settings["log_level"],
        format_mode=settings["log_format"],
        service_name="excel-io-example",
        instance_id=None,
        extra_fields=["sheet", "rows"],
    )
    output_dir = Path.cwd() / "example_output"
    output_dir.mkdir(parents=True, exist_ok=True)
    run_example(output_dir, ExcelConverter(settings))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
