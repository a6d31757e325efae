# Shared fixtures and sample data for the test-suite.
import pytest

from salesnav.session import (
    FilterType,
    FilterValue,
    SearchFilter,
    SearchRequest,
    SearchType,
    SelectionType,
    SessionToken,
)

SAMPLE_TOKEN = "oyT4SvXfQXWQEbOH54crEQ%3D%3D"
SAMPLE_TOKEN_DECODED = "oyT4SvXfQXWQEbOH54crEQ=="
SAMPLE_URL = (
    "https://www.linkedin.com/sales/search/people?query=(spellCorrectionEnabled:true,"
    "filters:List((type:CURRENT_COMPANY,values:List((id:urn:li:organization:825160,"
    'text:"Hyundai Motor Company",selectionType:INCLUDED)))))'
    f"&sessionId={SAMPLE_TOKEN}"
)

HYUNDAI_FILTER = SearchFilter(
    type=FilterType.CURRENT_COMPANY,
    values=[
        FilterValue(
            id="urn:li:organization:825160",
            text="Hyundai Motor Company",
            selection_type=SelectionType.INCLUDED,
        )
    ],
)


@pytest.fixture
def sample_request() -> SearchRequest:
    return SearchRequest(
        search_type=SearchType.PEOPLE,
        keywords="développeur",
        filters=[HYUNDAI_FILTER],
        session_token=SessionToken.from_value(SAMPLE_TOKEN),
    )
