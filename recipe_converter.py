#!/usr/bin/env python3
"""
Recipe Converter - Extract recipes from websites

Fetches a recipe page, harvests its schema.org structured data, and prints
the canonical recipes it contains as JSON, as readable text, or prints the
harvested graph itself as N-Triples.
"""
import argparse
import json
import logging
import os
import sys
from pathlib import Path

import requests
from dotenv import load_dotenv

from recipe_graph.const import (
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ENV_TIMEOUT,
    ENV_USER_AGENT,
    FORMAT_JSON,
    FORMAT_NTRIPLES,
    LENGTH_ABBREV,
    LENGTH_LONG,
)
from recipe_graph.exceptions import RecipeGraphError
from recipe_graph.extractors import parse_recipes
from recipe_graph.models import JsonRecipe
from recipe_graph.services import extract_document_from_url, scale_recipe_ingredients

FORMAT_TEXT = "text"

logger = logging.getLogger(__name__)


def _safe_title(recipe: JsonRecipe, index: int) -> str:
    title = recipe.name or ""
    safe_title = "".join(c for c in title if c.isalnum() or c in (' ', '-', '_')).strip()
    safe_title = safe_title.replace(' ', '_').lower()
    return safe_title or f"recipe_{index + 1}"


def format_recipe_text(recipe: JsonRecipe, servings: float | None = None,
                       length: str = LENGTH_ABBREV) -> str:
    """Render a recipe as plain text, optionally scaled to a number of servings."""
    lines = [recipe.name or "Untitled recipe"]
    if recipe.recipe_yield:
        lines.append(f"Servings: {recipe.recipe_yield.strip()}")
    if recipe.recipe_category:
        lines.append(f"Categories: {', '.join(recipe.recipe_category)}")
    if recipe.source_url:
        lines.append(f"Source: {recipe.source_url}")
    lines.append("")
    lines.append("Ingredients:")
    lines.extend(f"- {item}" for item in scale_recipe_ingredients(recipe, servings, length))
    lines.append("")
    lines.append("Instructions:")
    lines.extend(f"{number}. {step}"
                 for number, step in enumerate(recipe.recipe_instructions, start=1))
    return "\n".join(lines)


def save_recipes(recipes: list[JsonRecipe], output_dir: Path) -> list[Path]:
    """Write each recipe to ``<output_dir>/<title>.json``."""
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for index, recipe in enumerate(recipes):
        json_file = output_dir / f"{_safe_title(recipe, index)}.json"
        logger.info("Saving structured recipe to: %s", json_file)
        with open(json_file, 'w', encoding='utf-8') as f:
            json.dump(recipe.to_json(), f, indent=2, ensure_ascii=False)
        paths.append(json_file)
    return paths


def convert(url: str, output_format: str, output_dir: Path | None, timeout: float,
            user_agent: str, servings: float | None = None,
            length: str = LENGTH_ABBREV) -> bool:
    """Extract recipes from a URL and write them to stdout (and optionally to files).

    Returns:
        True if the page was fetched and processed, False otherwise
    """
    try:
        loaded = extract_document_from_url(url, timeout=timeout, user_agent=user_agent)
    except (requests.exceptions.RequestException, ValueError, RecipeGraphError) as e:
        logger.error("Failed to fetch %s: %s", url, e)
        return False

    if output_format == FORMAT_NTRIPLES:
        sys.stdout.write(loaded.store.to_ntriples())
        return True

    recipes = parse_recipes(loaded.store, loaded.final_url, loaded.document_order)
    if not recipes:
        logger.info("No recipes found at %s", loaded.final_url)

    if output_format == FORMAT_TEXT:
        print("\n\n".join(format_recipe_text(recipe, servings, length) for recipe in recipes))
    else:
        print(json.dumps([recipe.to_json() for recipe in recipes], indent=2,
                         ensure_ascii=False))

    if output_dir is not None and recipes:
        save_recipes(recipes, output_dir)
    return True


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the recipe converter."""
    # Load environment variables
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Extract schema.org recipes from websites into structured JSON"
    )
    parser.add_argument(
        "url",
        type=str,
        help="URL of the recipe website"
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=[FORMAT_JSON, FORMAT_TEXT, FORMAT_NTRIPLES],
        default=FORMAT_JSON,
        help="Output format (default: json)"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Also save each recipe as JSON in this directory"
    )
    parser.add_argument(
        "--servings",
        type=float,
        default=None,
        help="Scale ingredients to this many servings (text format only)"
    )
    parser.add_argument(
        "--long-units",
        action="store_true",
        help="Spell out unit names (text format only)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help=f"Seconds to wait for the server (can also be set via {ENV_TIMEOUT} env var)"
    )
    parser.add_argument(
        "--user-agent",
        default=None,
        help=f"User-Agent header (can also be set via {ENV_USER_AGENT} env var)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    timeout = args.timeout
    if timeout is None:
        try:
            timeout = float(os.getenv(ENV_TIMEOUT, DEFAULT_TIMEOUT))
        except ValueError:
            logger.error("%s must be a number of seconds", ENV_TIMEOUT)
            return 1
    user_agent = args.user_agent or os.getenv(ENV_USER_AGENT) or DEFAULT_USER_AGENT

    success = convert(
        url=args.url,
        output_format=args.output_format,
        output_dir=args.output_dir,
        timeout=timeout,
        user_agent=user_agent,
        servings=args.servings,
        length=LENGTH_LONG if args.long_units else LENGTH_ABBREV,
    )
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
