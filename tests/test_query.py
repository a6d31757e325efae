# ===============================================
# tests/test_query.py
# -----------------------------------------------
# Search query grammar: dump_query / load_query.
# ===============================================

import pytest

from salesnav.session.errors import MalformedUrlError, QuerySyntaxError
from salesnav.session.query import dump_query, load_query


def test_load_sample_query():
    text = (
        "(spellCorrectionEnabled:true,filters:List((type:CURRENT_COMPANY,values:List("
        '(id:urn:li:organization:825160,text:"Hyundai Motor Company",selectionType:INCLUDED)))))'
    )
    assert load_query(text) == {
        "spellCorrectionEnabled": "true",
        "filters": [
            {
                "type": "CURRENT_COMPANY",
                "values": [
                    {
                        "id": "urn:li:organization:825160",
                        "text": "Hyundai Motor Company",
                        "selectionType": "INCLUDED",
                    }
                ],
            }
        ],
    }


def test_load_empty_record_and_list():
    assert load_query("(parent:(),values:List())") == {"parent": {}, "values": []}


def test_load_escaped_quotes():
    assert load_query(r'(text:"say \"hi\" \\ bye")') == {"text": 'say "hi" \\ bye'}


def test_dump_quotes_only_when_needed():
    assert dump_query({"id": "urn:li:geo:1", "name": "a,b", "flag": False, "n": 3}) == (
        '(id:urn:li:geo:1,name:"a,b",flag:false,n:3)'
    )


def test_dump_always_quotes_text_and_keywords():
    assert dump_query({"keywords": "cto", "values": [{"text": "Acme"}]}) == (
        '(keywords:"cto",values:List((text:"Acme")))'
    )


def test_dump_skips_none_fields():
    assert dump_query({"a": None, "b": "x"}) == "(b:x)"


def test_dump_rejects_non_records():
    with pytest.raises(TypeError):
        dump_query(["not", "a", "record"])
    with pytest.raises(TypeError):
        dump_query({"when": object()})


def test_dump_then_load_preserves_structure():
    record = {
        "recentSearchParam": {"doLogHistory": "true"},
        "filters": [{"type": "REGION", "values": [{"id": "103644278", "text": " (Île-de-France) "}]}],
        "keywords": "",
    }
    assert load_query(dump_query(record)) == record


@pytest.mark.parametrize(
    "text",
    [
        "",
        "keywords:x",
        "(keywords:x",
        "(keywords x)",
        "(keywords:)",
        '(keywords:"x)',
        "(a:b))",
        "(a:List(b,)",
        "(:b)",
    ],
)
def test_load_rejects_bad_syntax(text):
    with pytest.raises(QuerySyntaxError) as exc:
        load_query(text)
    assert isinstance(exc.value, MalformedUrlError)
    assert exc.value.position >= 0
