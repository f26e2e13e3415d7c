"""Tests for harvesting JSON-LD and microdata from pages."""

import json

from recipe_graph.const import RDF_TYPE
from recipe_graph.extractors import jsonld_triples, load_document, microdata_triples
from recipe_graph.graph import BlankNode, Literal, NamedNode, all_of_type, node_values
from recipe_graph.models import JsonRecipeIngredient
from recipe_graph.services import parse_recipes_from_html

from .conftest import FINAL_URL, s


def page(*blocks) -> str:
    scripts = "".join(
        f'<script type="application/ld+json">{block if isinstance(block, str) else json.dumps(block)}</script>'
        for block in blocks
    )
    return f"<html><head>{scripts}</head><body><h1>Recipe</h1></body></html>"


RECIPE = {
    "@context": "https://schema.org",
    "@type": "Recipe",
    "name": "Pancakes",
    "recipeYield": 4,
    "recipeCategory": ["Breakfast", " Brunch"],
    "recipeIngredient": ["1 cup flour, sifted", "2 eggs", "1 1/4 cups milk"],
    "recipeInstructions": [
        {"@type": "HowToStep", "position": 2, "text": "Cook on a griddle."},
        {"@type": "HowToStep", "position": 1, "text": "Whisk everything together."},
    ],
}


class TestJsonLdTriples:
    """Tests for flattening JSON-LD into triples."""

    def test_types_and_properties(self):
        triples = list(jsonld_triples(page({"@context": "https://schema.org",
                                            "@id": "#recipe", "@type": "Recipe",
                                            "name": "Soup"}), FINAL_URL))
        recipe = NamedNode(FINAL_URL + "#recipe")
        assert [(t.subject, t.predicate, t.object) for t in triples] == [
            (recipe, NamedNode(RDF_TYPE), s("Recipe")),
            (recipe, s("name"), Literal("Soup")),
        ]

    def test_numbers_become_typed_literals(self):
        [_, triple] = jsonld_triples(page({"@type": "Recipe", "recipeYield": 4}), FINAL_URL)
        assert triple.object.value == "4"

    def test_malformed_blocks_are_skipped(self):
        html = page("{not json", {"@type": "Recipe", "name": "Soup"})
        triples = list(jsonld_triples(html, FINAL_URL))
        assert len(triples) == 2

    def test_page_without_jsonld(self):
        assert list(jsonld_triples("<html><body>Hi</body></html>", FINAL_URL)) == []

    def test_graph_and_references(self):
        data = {
            "@context": "http://schema.org/",
            "@graph": [
                {"@type": "WebPage", "@id": "https://example.com/#page"},
                {"@type": "Recipe", "name": "Stew",
                 "mainEntityOfPage": {"@id": "https://example.com/#page"}},
            ],
        }
        loaded = load_document(page(data), FINAL_URL)
        [recipe] = all_of_type(loaded.store, s("Recipe"))
        [main] = recipe.get(s("mainEntityOfPage"))
        assert main.node == NamedNode("https://example.com/#page")
        assert node_values(recipe.get(s("name"))) == ["Stew"]

    def test_nested_nodes_are_blank(self):
        loaded = load_document(page(RECIPE), FINAL_URL)
        [recipe] = all_of_type(loaded.store, s("Recipe"))
        steps = recipe.get(s("recipeInstructions"), loaded.document_order)
        assert all(isinstance(step.node, BlankNode) for step in steps)
        assert [node_values(step.get(s("text"))) for step in steps] == [
            ["Cook on a griddle."], ["Whisk everything together."]]

    def test_vocab_context(self):
        data = {
            "@context": {"@vocab": "http://schema.org/"},
            "@type": "Recipe",
            "name": "Salad",
        }
        loaded = load_document(page(data), FINAL_URL)
        [recipe] = all_of_type(loaded.store, s("Recipe"))
        assert node_values(recipe.get(s("name"))) == ["Salad"]

    def test_language_values(self):
        data = {"@type": "Recipe", "name": {"@value": "Suppe", "@language": "de"}}
        loaded = load_document(page(data), FINAL_URL)
        [recipe] = all_of_type(loaded.store, s("Recipe"))
        assert node_values(recipe.get(s("name"))) == ["Suppe"]

    def test_blank_node_labels_are_scoped_to_their_block(self):
        html = page(
            {"@id": "_:b0", "@type": "Recipe", "name": "Soup"},
            {"@id": "_:b0", "@type": "Recipe", "name": "Bread"},
        )
        loaded = load_document(html, FINAL_URL)
        recipes = all_of_type(loaded.store, s("Recipe"))
        assert len({recipe.node for recipe in recipes}) == 2
        assert [node_values(r.get(s("name"))) for r in recipes] == [["Soup"], ["Bread"]]

    def test_labels_within_a_block_are_shared(self):
        data = [
            {"@id": "_:step", "@type": "HowToStep", "text": "Stir."},
            {"@type": "Recipe", "recipeInstructions": {"@id": "_:step"}},
        ]
        [recipe] = parse_recipes_from_html(page(data), FINAL_URL)
        assert recipe.recipe_instructions == ["Stir."]

    def test_markup_labels_do_not_collide_with_generated_ones(self):
        data = {
            "@type": "Recipe",
            "name": "Stew",
            "author": {"@id": "_:genid0", "name": "Ann"},
        }
        loaded = load_document(page(data), FINAL_URL)
        [recipe] = all_of_type(loaded.store, s("Recipe"))
        [author] = recipe.get(s("author"))
        assert author.node != recipe.node
        assert node_values(recipe.get(s("name"))) == ["Stew"]
        assert node_values(author.get(s("name"))) == ["Ann"]


class TestParseRecipesFromHtml:
    """End-to-end tests from markup to canonical recipes."""

    def test_full_recipe(self):
        [recipe] = parse_recipes_from_html(page(RECIPE), FINAL_URL)
        assert recipe.name == "Pancakes"
        assert recipe.recipe_yield == "4"
        assert recipe.recipe_category == ["Breakfast", "Brunch"]
        assert recipe.recipe_ingredient == [
            JsonRecipeIngredient(quantity="1", unit="cup", name="flour", preparation="sifted"),
            JsonRecipeIngredient(quantity="2", name="eggs"),
            JsonRecipeIngredient(quantity="1 1/4", unit="cups", name="milk"),
        ]
        assert recipe.recipe_instructions == [
            "Whisk everything together.", "Cook on a griddle."]
        assert recipe.source_url == FINAL_URL

    def test_structured_ingredients(self):
        data = {
            "@type": "Recipe",
            "recipeIngredient": [
                {"name": "butter, melted",
                 "requiredQuantity": {"@type": "QuantitativeValue", "value": 2,
                                      "unitText": "tbsp"}},
            ],
        }
        [recipe] = parse_recipes_from_html(page(data), FINAL_URL)
        assert recipe.recipe_ingredient == [
            JsonRecipeIngredient(quantity="2", unit="tbsp", name="butter", preparation="melted")]

    def test_page_without_recipe(self):
        html = page({"@context": "https://schema.org", "@type": "Article", "name": "News"})
        assert parse_recipes_from_html(html, FINAL_URL) == []

    def test_ingredients_keep_document_order(self):
        [recipe] = parse_recipes_from_html(page(RECIPE), FINAL_URL)
        loaded = load_document(page(RECIPE), FINAL_URL)
        [node] = all_of_type(loaded.store, s("Recipe"))
        ordered = node_values(node.get(s("recipeIngredient"), loaded.document_order))
        assert ordered == ["1 cup flour, sifted", "2 eggs", "1 1/4 cups milk"]
        assert [i.name for i in recipe.recipe_ingredient] == ["flour", "eggs", "milk"]


MICRODATA_PAGE = """<html><body>
<div itemscope itemtype="http://schema.org/Recipe">
  <h1 itemprop="name">Muffins</h1>
  <meta itemprop="recipeYield" content="12">
  <span itemprop="recipeCategory">Baking</span>
  <ul>
    <li itemprop="recipeIngredient">2 cups flour</li>
    <li itemprop="recipeIngredient">1 egg, beaten</li>
  </ul>
  <div itemprop="recipeInstructions" itemscope itemtype="http://schema.org/HowToStep">
    <meta itemprop="position" content="2"><p itemprop="text">Bake.</p>
  </div>
  <div itemprop="recipeInstructions" itemscope itemtype="http://schema.org/HowToStep">
    <meta itemprop="position" content="1"><p itemprop="text">Mix.</p>
  </div>
</div>
</body></html>"""


class TestMicrodata:
    """Tests for harvesting microdata items."""

    def test_items_become_triples(self):
        loaded = load_document(MICRODATA_PAGE, FINAL_URL)
        [recipe] = all_of_type(loaded.store, s("Recipe"))
        assert node_values(recipe.get(s("name"))) == ["Muffins"]
        steps = recipe.get(s("recipeInstructions"))
        assert len(steps) == 2
        assert all(isinstance(step.node, BlankNode) for step in steps)

    def test_page_without_microdata(self):
        assert list(microdata_triples("<html><body><p>Hi</p></body></html>", FINAL_URL)) == []
        assert list(microdata_triples("", FINAL_URL)) == []

    def test_microdata_recipe(self):
        [recipe] = parse_recipes_from_html(MICRODATA_PAGE, FINAL_URL)
        assert recipe.name == "Muffins"
        assert recipe.recipe_yield == "12"
        assert recipe.recipe_category == ["Baking"]
        assert recipe.recipe_ingredient == [
            JsonRecipeIngredient(quantity="2", unit="cups", name="flour"),
            JsonRecipeIngredient(quantity="1", name="egg", preparation="beaten"),
        ]
        assert recipe.recipe_instructions == ["Mix.", "Bake."]

    def test_jsonld_and_microdata_together(self):
        html = MICRODATA_PAGE.replace(
            "<body>",
            '<body><script type="application/ld+json">'
            + json.dumps({"@context": "https://schema.org", "@type": "Recipe", "name": "Scones"})
            + "</script>",
        )
        recipes = parse_recipes_from_html(html, FINAL_URL)
        assert [recipe.name for recipe in recipes] == ["Scones", "Muffins"]
