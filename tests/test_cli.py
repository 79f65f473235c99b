import argparse

import pytest

from cli.run import _category, _format_row, build_parser
from core.entities import Category


def test_parser_defaults():
    args = build_parser().parse_args(["studio"])

    assert args.query == "studio"
    assert args.category is None
    assert args.hot == Category.RENT
    assert args.limit == 20
    assert args.history is False


def test_category_argument_is_case_insensitive():
    args = build_parser().parse_args(["--category", "Ride", "--hot", "forum"])

    assert args.category == Category.RIDE
    assert args.hot == Category.FORUM


def test_unknown_category_is_rejected():
    with pytest.raises(argparse.ArgumentTypeError):
        _category("boats")


def test_row_format(make_result):
    result = make_result(Category.RIDE, id="d1", title="Berkeley → SFO", subtitle="Driver · Flexible")

    assert _format_row(1, result) == "  01. [Carpool] Berkeley → SFO | Driver · Flexible"
    assert _format_row(2, result, score=80, likes=3) == (
        "  02. score=80 [Carpool] Berkeley → SFO | Driver · Flexible | likes=3"
    )
