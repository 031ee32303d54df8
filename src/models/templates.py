"""Hard-coded documents: the new-recipe scaffold and the bundled sample."""

from __future__ import annotations

from src.models.document import (
    HeatLevel,
    HeroBlock,
    IngredientItem,
    IngredientsBlock,
    NoteBlock,
    RecipeDocument,
    StepBlock,
)

SAMPLE_FILE_NAME = "sample-stir-fry.md"


def new_recipe_document(title: str) -> RecipeDocument:
    return RecipeDocument(
        title=title,
        blocks=[HeroBlock(), IngredientsBlock(), StepBlock(title="Step")],
    )


def sample_document() -> RecipeDocument:
    return RecipeDocument(
        title="Weeknight Stir-Fry",
        blocks=[
            HeroBlock(
                image_name="hero",
                servings="2",
                total_time="20m",
                nutrition="520 kcal",
            ),
            IngredientsBlock(
                ingredients=[
                    IngredientItem(name="Noodles", amount="200g", icon="leaf.fill"),
                    IngredientItem(name="Chili oil", amount="1 tbsp", icon="flame.fill"),
                    IngredientItem(name="Garlic", amount="2 cloves", icon="drop.fill"),
                ]
            ),
            StepBlock(
                title="Boil noodles",
                text="Boil noodles until al dente.",
                icon="timer",
                duration_minutes=8,
                heat=HeatLevel.HIGH,
            ),
            StepBlock(
                title="Stir-fry",
                text="Toss noodles with chili oil and garlic.",
                icon="flame",
                duration_minutes=3,
                heat=HeatLevel.HIGH,
            ),
            NoteBlock(text="Finish with scallions and sesame seeds."),
        ],
    )
