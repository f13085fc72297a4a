"""Minimal example converting one record under two tag namespaces."""

import json
from dataclasses import dataclass

from tagconv import tagged, to_map


@dataclass
class Person:
    age: str = tagged(default="", foo="age", bar="details.myAge")
    year: int = tagged(default=0, foo="dob.year", bar="details.birthYear")
    month: int = tagged(default=0, foo="dob.month", bar="-")


def main() -> None:
    """Print the same record as JSON for the ``foo`` and ``bar`` namespaces."""
    person = Person(age="22", year=1998, month=1)
    print("foo:", json.dumps(to_map(person, "foo"), indent=2))
    print("bar:", json.dumps(to_map(person, "bar"), indent=2))


if __name__ == "__main__":
    main()
