import pytest
from pydantic import ValidationError

from template_validator.schemas.template import CallToAction, ListItem, QuickReplyButton
from template_validator.schemas.validation import RejectionKind
from template_validator.validation.schema import (
    is_valid_template_name,
    has_sequential_variables,
    normalize_template_name,
    template_name_error,
    text_length,
    validate_template,
)


def assert_rejected(result, kind, field=None):
    assert not result.valid
    assert result.error.kind == kind
    if field is not None:
        assert result.error.field == field


def test_valid_draft_accepted(make_draft):
    result = validate_template(make_draft())
    assert result.valid
    assert result.error is None


def test_accepts_plain_mapping(test_template_payload):
    assert validate_template(test_template_payload).valid


def test_malformed_mapping_raises():
    with pytest.raises(ValidationError):
        validate_template({"name": "ok", "body": 42})


@pytest.mark.parametrize(
    "name",
    ["Template1", "1template", "_template", "tem-plate", "", "template\n", "tem\tplate", "template\x00"],
)
def test_invalid_names(make_draft, name):
    assert_rejected(validate_template(make_draft(name=name)), RejectionKind.INVALID_NAME, "name")


def test_name_length_bound(make_draft):
    assert validate_template(make_draft(name="a" * 512)).valid
    assert_rejected(
        validate_template(make_draft(name="a" * 513)), RejectionKind.INVALID_NAME
    )


def test_template_1_accepted(make_draft):
    assert validate_template(make_draft(name="template_1")).valid


@pytest.mark.parametrize(
    "field,value",
    [
        ("language", "fr"),
        ("category", "utility"),
        ("template_type", "carousel"),
    ],
)
def test_enum_values(make_draft, field, value):
    assert_rejected(
        validate_template(make_draft(**{field: value})),
        RejectionKind.INVALID_ENUM_VALUE,
        field,
    )


def test_every_language_accepted(make_draft):
    for language in ("pt_BR", "pt-BR", "en", "es"):
        assert validate_template(make_draft(language=language)).valid


def test_body_bounds(make_draft):
    assert_rejected(validate_template(make_draft(body="")), RejectionKind.BODY_EMPTY, "body")
    assert_rejected(
        validate_template(make_draft(body="x" * 1025)),
        RejectionKind.BODY_LENGTH_EXCEEDED,
        "body",
    )
    assert validate_template(make_draft(body="x" * 1024)).valid


def test_sequential_variables(make_draft):
    assert validate_template(make_draft(body="{{1}} olá {{2}}")).valid
    assert_rejected(
        validate_template(make_draft(body="{{1}} olá {{3}}")),
        RejectionKind.NON_SEQUENTIAL_VARIABLES,
    )


def test_sequential_rule_ignores_repeats_and_order(make_draft):
    assert validate_template(make_draft(body="{{2}} e {{1}} e {{1}}")).valid


def test_sequence_must_start_at_one(make_draft):
    assert_rejected(
        validate_template(make_draft(body="Olá {{2}}")),
        RejectionKind.NON_SEQUENTIAL_VARIABLES,
    )
    assert_rejected(
        validate_template(make_draft(body="Olá {{0}}")),
        RejectionKind.NON_SEQUENTIAL_VARIABLES,
    )


@pytest.mark.parametrize("body", ["{{1}}{{2}}", "{{1}} {{2}}", "Oi {{1}}\n\t{{2}}"])
def test_adjacent_variables(make_draft, body):
    assert_rejected(
        validate_template(make_draft(body=body)), RejectionKind.ADJACENT_VARIABLES, "body"
    )


def test_punctuation_separator_is_enough(make_draft):
    assert validate_template(make_draft(body="{{1}} e {{2}}")).valid
    assert validate_template(make_draft(body="{{1}},{{2}}")).valid


def test_header_and_footer_lengths(make_draft):
    assert validate_template(make_draft(header="h" * 60, footer="f" * 60)).valid
    assert_rejected(
        validate_template(make_draft(header="h" * 61)),
        RejectionKind.FIELD_LENGTH_EXCEEDED,
        "header",
    )
    assert_rejected(
        validate_template(make_draft(footer="f" * 61)),
        RejectionKind.FIELD_LENGTH_EXCEEDED,
        "footer",
    )


def test_quick_reply_cardinality(make_draft, make_buttons):
    assert validate_template(
        make_draft(template_type="quick-reply", buttons=make_buttons(10))
    ).valid
    assert_rejected(
        validate_template(make_draft(template_type="quick-reply", buttons=make_buttons(11))),
        RejectionKind.STRUCTURAL_CARDINALITY_EXCEEDED,
        "buttons",
    )


def test_call_to_action_cardinality(make_draft, make_actions):
    assert validate_template(
        make_draft(template_type="call-to-action", actions=make_actions("url", "url", "phone"))
    ).valid
    assert_rejected(
        validate_template(
            make_draft(template_type="call-to-action", actions=make_actions("url", "url", "url"))
        ),
        RejectionKind.STRUCTURAL_CARDINALITY_EXCEEDED,
    )
    assert_rejected(
        validate_template(
            make_draft(template_type="call-to-action", actions=make_actions("phone", "phone"))
        ),
        RejectionKind.STRUCTURAL_CARDINALITY_EXCEEDED,
    )


def test_entry_title_lengths(make_draft):
    long_button = make_draft(
        template_type="quick-reply",
        buttons=[QuickReplyButton(id="b1", title="x" * 21)],
    )
    assert_rejected(
        validate_template(long_button),
        RejectionKind.FIELD_LENGTH_EXCEEDED,
        "buttons[0].title",
    )

    long_action = make_draft(
        template_type="call-to-action",
        actions=[CallToAction(type="url", title="x" * 26, value="https://example.com")],
    )
    assert_rejected(
        validate_template(long_action),
        RejectionKind.FIELD_LENGTH_EXCEEDED,
        "actions[0].title",
    )

    long_item = make_draft(
        template_type="list-picker",
        list_items=[ListItem(id="i1", title="ok", description="d" * 73)],
    )
    assert_rejected(
        validate_template(long_item),
        RejectionKind.FIELD_LENGTH_EXCEEDED,
        "list_items[0].description",
    )


def test_entry_lengths_apply_regardless_of_type(make_draft):
    draft = make_draft(
        template_type="text",
        list_items=[ListItem(id="i1", title="x" * 25)],
    )
    assert_rejected(
        validate_template(draft),
        RejectionKind.FIELD_LENGTH_EXCEEDED,
        "list_items[0].title",
    )


def test_empty_entry_title_rejected(make_draft):
    draft = make_draft(
        template_type="quick-reply", buttons=[QuickReplyButton(id="b1", title="")]
    )
    assert_rejected(
        validate_template(draft),
        RejectionKind.FIELD_LENGTH_EXCEEDED,
        "buttons[0].title",
    )


def test_unknown_action_type_rejected(make_draft):
    draft = make_draft(
        template_type="call-to-action",
        actions=[CallToAction(type="email", title="Mail us")],
    )
    assert_rejected(
        validate_template(draft),
        RejectionKind.INVALID_ENUM_VALUE,
        "actions[0].type",
    )


@pytest.mark.parametrize("url", [None, "", "not a url", "example.com/image.jpg"])
def test_media_url_rejected(make_draft, url):
    assert_rejected(
        validate_template(make_draft(template_type="media", media_url=url)),
        RejectionKind.INVALID_MEDIA_URL,
        "media_url",
    )


def test_media_url_accepted(make_draft):
    draft = make_draft(template_type="media", media_url="https://cdn.example.com/a.jpg")
    assert validate_template(draft).valid


def test_media_url_ignored_for_other_types(make_draft):
    assert validate_template(make_draft(template_type="text", media_url="bad")).valid


def test_first_failure_is_deterministic(make_draft, make_buttons):
    draft = make_draft(
        name="Bad Name",
        language="fr",
        body="{{1}}{{3}}",
        template_type="quick-reply",
        buttons=make_buttons(11),
    )
    first = validate_template(draft)
    second = validate_template(draft)
    assert first == second
    assert first.error.kind == RejectionKind.INVALID_NAME


def test_rule_order(make_draft, make_buttons):
    # Gap and adjacency together: the sequence rule runs first
    assert_rejected(
        validate_template(make_draft(body="{{1}}{{3}}")),
        RejectionKind.NON_SEQUENTIAL_VARIABLES,
    )
    # Long footer and too many buttons: footer runs first
    draft = make_draft(
        footer="f" * 61, template_type="quick-reply", buttons=make_buttons(11)
    )
    assert_rejected(validate_template(draft), RejectionKind.FIELD_LENGTH_EXCEEDED, "footer")
    # Cardinality before per-entry lengths
    buttons = make_buttons(11)
    buttons[0] = QuickReplyButton(id="b", title="x" * 30)
    draft = make_draft(template_type="quick-reply", buttons=buttons)
    assert_rejected(validate_template(draft), RejectionKind.STRUCTURAL_CARDINALITY_EXCEEDED)


def test_stale_variables_table_does_not_matter(make_draft, variable):
    draft = make_draft(body="Oi {{1}}", variables=[variable("7")])
    assert validate_template(draft).valid


def test_template_name_error_messages():
    assert template_name_error("") == "Name is required"
    assert template_name_error("Abc") == "Must start with a lowercase letter"
    assert template_name_error("abc-def") == (
        "Use only lowercase letters, numbers and underscores"
    )
    assert template_name_error("abc_def") is None
    assert is_valid_template_name("order_shipped_2")
    assert not is_valid_template_name("order shipped")


def test_normalize_template_name():
    assert normalize_template_name("Order Shipped-2") == "order_shipped_2"
    assert normalize_template_name("olá") == "ol_"


def test_trailing_newline_name_is_invalid():
    assert not is_valid_template_name("template\n")
    assert template_name_error("template\n") == (
        "Use only lowercase letters, numbers and underscores"
    )


def test_very_long_placeholder_number(make_draft):
    digits = "1" * 5000
    assert not has_sequential_variables("{{" + digits + "}}")
    assert has_sequential_variables("{{1}} e {{002}} e {{2}}")
    assert_rejected(
        validate_template(make_draft(body="Oi {{1}} e {{" + "9" * 900 + "}}")),
        RejectionKind.NON_SEQUENTIAL_VARIABLES,
    )


def test_non_ascii_digits_are_not_placeholders(make_draft):
    # Arabic-Indic and full-width numerals are plain text to the provider
    assert validate_template(make_draft(body="Oi {{١}}")).valid
    assert validate_template(make_draft(body="{{1}}{{٢}}")).valid
    assert validate_template(make_draft(body="{{1}} e {{３}}")).valid


def test_lengths_count_utf16_code_units(make_draft):
    assert validate_template(make_draft(body="😀" * 512)).valid
    assert_rejected(
        validate_template(make_draft(body="😀" * 513)),
        RejectionKind.BODY_LENGTH_EXCEEDED,
        "body",
    )
    draft = make_draft(
        template_type="quick-reply",
        buttons=[QuickReplyButton(id="b1", title="👍" * 11)],
    )
    assert_rejected(
        validate_template(draft), RejectionKind.FIELD_LENGTH_EXCEEDED, "buttons[0].title"
    )
    assert text_length("olá 👍") == 6


def test_action_total_only_capped_for_call_to_action(make_draft, make_actions):
    actions = make_actions("copy_code", "copy_code", "copy_code", "copy_code")
    assert validate_template(make_draft(template_type="text", actions=actions)).valid
    assert_rejected(
        validate_template(make_draft(template_type="call-to-action", actions=actions)),
        RejectionKind.STRUCTURAL_CARDINALITY_EXCEEDED,
        "actions",
    )
