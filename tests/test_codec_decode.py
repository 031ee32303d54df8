from src.codec.markdown import decode, parse_key_value
from src.models.document import (
    DEFAULT_TITLE,
    HeatLevel,
    HeroBlock,
    IngredientsBlock,
    NoteBlock,
    StepBlock,
)


def test_empty_input_gives_default_document():
    doc = decode("")
    assert doc.title == DEFAULT_TITLE
    assert doc.blocks == []


def test_first_title_line_wins():
    doc = decode("# My Title\n# Other Title\n\n[note]\ntext: hi\n")
    assert doc.title == "My Title"


def test_title_after_marker_is_block_content():
    doc = decode("[note]\n# Not a title\n")
    assert doc.title == DEFAULT_TITLE
    assert doc.blocks[0].text == "# Not a title"


def test_lines_before_first_marker_are_discarded():
    doc = decode("# T\nstray line\nservings: 9\n[hero]\nservings: 2\n")
    assert len(doc.blocks) == 1
    assert doc.blocks[0].servings == "2"


def test_markers_are_case_insensitive_and_unknown_markers_ignored():
    doc = decode("# T\n  [HERO]  \nimage: hero\n[Steps]\n[Note]\ntext: n\n")
    assert [b.kind for b in doc.blocks] == ["hero", "note"]
    # "[Steps]" is not a marker, so it is treated as a hero field line and ignored
    assert doc.blocks[0].image_name == "hero"


def test_mixed_newline_styles():
    doc = decode("# T\r\n[hero]\r\nservings: 4\rtime: 1h\n")
    hero = doc.blocks[0]
    assert hero.servings == "4"
    assert hero.total_time == "1h"


def test_hero_fields_accept_colon_and_equals():
    doc = decode("[hero]\nImage = pic\nservings: 2\ntime=20m\nnutrition: 520 kcal\ncolor: red\n")
    hero = doc.blocks[0]
    assert isinstance(hero, HeroBlock)
    assert (hero.image_name, hero.servings, hero.total_time, hero.nutrition) == (
        "pic",
        "2",
        "20m",
        "520 kcal",
    )


def test_ingredient_key_value_parts():
    doc = decode("[ingredients]\n- name=Garlic | amount=2 cloves | icon=drop.fill\n")
    block = doc.blocks[0]
    assert isinstance(block, IngredientsBlock)
    item = block.ingredients[0]
    assert (item.name, item.amount, item.icon) == ("Garlic", "2 cloves", "drop.fill")


def test_ingredient_positional_fallback():
    doc = decode("[ingredients]\n- Garlic\n- Salt | a pinch\n- amount=1 | Pepper\n")
    items = doc.blocks[0].ingredients
    assert [(i.name, i.amount, i.icon) for i in items] == [
        ("Garlic", "", None),
        ("Salt", "a pinch", None),
        ("Pepper", "1", None),
    ]


def test_ingredients_without_name_or_dash_are_dropped():
    doc = decode("[ingredients]\nGarlic\n- amount=2 | icon=x\n-\n- name=Oil\n")
    assert [i.name for i in doc.blocks[0].ingredients] == ["Oil"]


def test_step_fields():
    text = "[step]\ntitle: Boil\ntime: 1h30\nheat: HIGH\nicon: timer\ntext: Boil\\nuntil done\n"
    step = decode(text).blocks[0]
    assert isinstance(step, StepBlock)
    assert step.title == "Boil"
    assert step.duration_minutes == 90
    assert step.heat is HeatLevel.HIGH
    assert step.icon == "timer"
    assert step.text == "Boil\nuntil done"


def test_step_unknown_heat_and_missing_time_are_absent():
    step = decode("[step]\nheat: scorching\n").blocks[0]
    assert step.heat is None
    assert step.duration_minutes is None


def test_step_free_lines_and_repeated_text_concatenate():
    text = "[step]\ntext: first\nJust a paragraph\n\ntext: second\ncolour: blue\n"
    step = decode(text).blocks[0]
    assert step.text == "first\nJust a paragraph\nsecond"


def test_note_keeps_other_pairs_as_text():
    note = decode("[note]\nTip: chill first\ntext: serve\\ncold\n").blocks[0]
    assert isinstance(note, NoteBlock)
    assert note.text == "Tip: chill first\nserve\ncold"


def test_block_order_is_preserved():
    text = "[note]\ntext: a\n[step]\ntitle: b\n[hero]\n[note]\ntext: c\n"
    assert [b.kind for b in decode(text).blocks] == ["note", "step", "hero", "note"]


def test_decode_fresh_ids_each_time():
    text = "[step]\ntitle: a\n"
    assert decode(text).blocks[0].id != decode(text).blocks[0].id


def test_decode_never_raises_on_garbage():
    garbage = "\x00[]\n[step\n]\n: :\n=\n[step]\ntime: -5:00\n[ingredients]\n- |||\n"
    doc = decode(garbage)
    assert doc.blocks[0].duration_minutes is None


def test_parse_key_value_prefers_colon():
    assert parse_key_value("time: 10=20") == ("time", "10=20")
    assert parse_key_value("Amount = 2") == ("amount", "2")
    assert parse_key_value(": value") is None
    assert parse_key_value("   ") is None
