import pytest
from pydantic import BaseModel

from mgqs.flows.templating import MediaAttachment, PromptTemplate, TemplateError


class _Lesson(BaseModel):
    subject: str
    chapter: str
    topics: list[str] = []


def test_substitutes_fields_and_nested_paths():
    template = PromptTemplate('Subject "{{subject}}", taught by {{tutor.name}}.')

    payload = template.render({"subject": "Science", "tutor": {"name": "Ms. Das"}})

    assert payload.text == 'Subject "Science", taught by Ms. Das.'
    assert payload.media == ()


def test_missing_and_none_values_render_empty():
    template = PromptTemplate("[{{subject}}][{{missing}}][{{tutor.name}}]")

    payload = template.render({"subject": None, "tutor": None})

    assert payload.text == "[][][]"


def test_scalar_formatting():
    template = PromptTemplate("{{flag}} {{count}} {{items}}")

    payload = template.render({"flag": True, "count": 3, "items": ["a", "b"]})

    assert payload.text == "true 3 a, b"


def test_if_else_and_unless():
    template = PromptTemplate(
        "{{#if comprehensive}}all{{else}}{{count}}{{/if}}|{{#unless hint}}full{{/unless}}"
    )

    assert template.render({"comprehensive": True, "hint": False}).text == "all|full"
    assert template.render({"comprehensive": False, "count": 5, "hint": True}).text == "5|"


@pytest.mark.parametrize("value", [None, False, "", "   ", [], 0])
def test_falsy_values_skip_if_block(value):
    template = PromptTemplate("{{#if value}}shown{{else}}hidden{{/if}}")

    assert template.render({"value": value}).text == "hidden"


def test_each_exposes_item_and_loop_markers():
    template = PromptTemplate(
        "{{#each types}}{{#if @first}}<{{/if}}{{@index}}:{{this}}{{#unless @last}}, {{/unless}}{{/each}}>"
    )

    payload = template.render({"types": ["mcq", "short_answer", "true_false"]})

    assert payload.text == "<0:mcq, 1:short_answer, 2:true_false>"


def test_each_falls_back_to_outer_scope():
    template = PromptTemplate("{{#each turns}}{{subject}}/{{this.text}};{{/each}}")

    payload = template.render({"subject": "Physics", "turns": [{"text": "hi"}, {"text": "why?"}]})

    assert payload.text == "Physics/hi;Physics/why?;"


def test_media_attachments_keep_order_and_leave_markers():
    template = PromptTemplate("Pages:\n{{#each pages}}{{media url=this}}\n{{/each}}Done")
    first = "data:image/png;base64,AAAA"
    second = "data:image/jpeg;base64,BBBB"

    payload = template.render({"pages": [first, second]})

    assert payload.text == "Pages:\n[Image 1]\n[Image 2]\nDone"
    assert payload.media == (
        MediaAttachment(url=first, mime_type="image/png"),
        MediaAttachment(url=second, mime_type="image/jpeg"),
    )


def test_empty_media_value_attaches_nothing():
    template = PromptTemplate("Image: {{media url=photo}}")

    payload = template.render({"photo": None})

    assert payload.text == "Image:"
    assert payload.media == ()


def test_rendering_is_deterministic_and_collapses_blank_lines():
    template = PromptTemplate("Line one.   \n\n\n\n{{#if extra}}extra{{/if}}\n\n\nLine two.\n")
    context = {"extra": False}

    first = template.render(context)
    second = template.render(context)

    assert first == second
    assert first.text == "Line one.\n\nLine two."


@pytest.mark.parametrize(
    "source",
    [
        "{{#if open}}never closed",
        "{{/if}}",
        "{{#if a}}x{{/unless}}",
        "{{else}}",
        "{{> partial}}",
        "{{#with person}}x{{/with}}",
        "{{media src=photo}}",
        "{{bad-name}}",
    ],
)
def test_malformed_templates_fail_at_construction(source):
    with pytest.raises(TemplateError):
        PromptTemplate(source)


def test_fields_ignore_names_inside_each_blocks():
    template = PromptTemplate("{{subject}}{{#each topics}}{{this}}{{name}}{{/each}}{{#if chapter}}x{{/if}}")

    assert template.fields() == {"subject", "topics", "chapter"}


def test_check_fields_accepts_schema_and_extra_names():
    template = PromptTemplate("{{subject}} {{chapter}} {{#if is_hard}}hard{{/if}}")

    template.check_fields(_Lesson, extra=("is_hard",))


def test_check_fields_reports_unknown_names():
    template = PromptTemplate("{{subject}} {{chaptr}}")

    with pytest.raises(TemplateError, match="chaptr"):
        template.check_fields(_Lesson)
