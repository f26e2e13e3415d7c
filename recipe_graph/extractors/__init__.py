"""Recipe extraction from document graphs, and the page fetching that feeds it."""
from .recipe_extractor import RecipeExtractor, parse_recipes
from .scraper import FetchedDocument, fetch_document
from .structured_data import (
    JsonLdFlattener,
    MicrodataFlattener,
    jsonld_triples,
    load_document,
    microdata_triples,
    page_triples,
)

__all__ = [
    "FetchedDocument",
    "JsonLdFlattener",
    "MicrodataFlattener",
    "RecipeExtractor",
    "fetch_document",
    "jsonld_triples",
    "load_document",
    "microdata_triples",
    "page_triples",
    "parse_recipes",
]
