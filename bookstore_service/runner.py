"""
Query runner: executes the fixed bookstore query sequence against one
collection, printing each result before moving on to the next step.

Steps are independent. None of them reads the result of an earlier one,
nothing is retried, and the first failure stops the run with every earlier
write already applied.

Usage:
    python runner.py
"""

import sys
from typing import Any, Callable, Dict, List, NamedTuple

from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

import indexes
import queries
from cluster_manager import connect_to_cluster, get_collection
from config import COLLECTION_NAME, DATABASE_NAME, MONGO_URI
from logger import logger
from response_formatter import SEPARATOR, bold, cyan, print_step, sanitise_value


class QueryStep(NamedTuple):
    label: str
    run: Callable[[Collection], Any]


def build_steps() -> List[QueryStep]:
    """Return the query sequence in execution order."""
    return [
        QueryStep("Books in Fiction genre",
                  lambda c: queries.find_by_genre(c, "Fiction")),
        QueryStep("Books published after 1950",
                  lambda c: queries.find_published_after(c, 1950)),
        QueryStep("Books by George Orwell",
                  lambda c: queries.find_by_author(c, "George Orwell")),
        QueryStep("Updating price of '1984' to 15.99",
                  lambda c: queries.update_price(c, "1984", 15.99)),
        QueryStep("Updated '1984'",
                  lambda c: queries.find_by_title(c, "1984")),
        QueryStep("Deleting 'The Hobbit'",
                  lambda c: queries.delete_by_title(c, "The Hobbit")),
        QueryStep("Remaining book count",
                  queries.count_books),
        QueryStep("In-stock books published after 2010",
                  lambda c: queries.find_in_stock_published_after(c, 2010)),
        QueryStep("Projected fields (title, author, price)",
                  lambda c: queries.find_projected(c, ("title", "author", "price"))),
        QueryStep("Books sorted by price (ascending)",
                  lambda c: queries.find_sorted_by_price(c, ASCENDING)),
        QueryStep("Books sorted by price (descending)",
                  lambda c: queries.find_sorted_by_price(c, DESCENDING)),
        QueryStep(f"Page 1 (first {queries.PAGE_SIZE} books)",
                  lambda c: queries.find_page(c, 1, queries.PAGE_SIZE)),
        QueryStep(f"Page 2 (next {queries.PAGE_SIZE} books)",
                  lambda c: queries.find_page(c, 2, queries.PAGE_SIZE)),
        QueryStep("Average price by genre",
                  queries.average_price_by_genre),
        QueryStep("Author with the most books",
                  queries.top_author),
        QueryStep("Books grouped by decade",
                  queries.count_by_decade),
        QueryStep("Created index on title",
                  indexes.create_title_index),
        QueryStep("Created compound index on author + published_year",
                  indexes.create_author_year_index),
        QueryStep("Explain query performance (title == '1984')",
                  lambda c: queries.explain_find_by_title(c, "1984")),
    ]


def run_queries(collection: Collection, echo: bool = True) -> List[Dict[str, Any]]:
    """Run every step in order and return ``{"step", "label", "result"}`` records.

    With ``echo`` set, each result is printed as soon as its step finishes.
    Exceptions from the database propagate unchanged.
    """
    results: List[Dict[str, Any]] = []
    for number, step in enumerate(build_steps(), start=1):
        logger.debug("Step %d: %s", number, step.label)
        result = step.run(collection)
        if echo:
            print_step(number, step.label, result)
        results.append({
            "step": number,
            "label": step.label,
            "result": sanitise_value(result),
        })
    return results


def run(
    mongo_uri: str = MONGO_URI,
    database_name: str = DATABASE_NAME,
    collection_name: str = COLLECTION_NAME,
    echo: bool = True,
) -> List[Dict[str, Any]]:
    """Open one connection, run the sequence on the collection, then close it."""
    client = connect_to_cluster(mongo_uri)
    try:
        collection = get_collection(client, database_name, collection_name)
        results = run_queries(collection, echo=echo)
    finally:
        client.close()
        logger.info("Connection to %s closed", mongo_uri)

    if echo:
        print(f"\n{cyan('Connection closed')}")
    return results


def main() -> None:
    print(SEPARATOR)
    print(bold(f"Bookstore queries on {DATABASE_NAME}.{COLLECTION_NAME}"))
    print(SEPARATOR)

    try:
        run()
    except Exception as e:
        logger.error("Query run failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
