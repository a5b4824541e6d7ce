"""
Parsing of the model's structured reply.

Two separate stages: locate the `<response>` block inside free text, then
decode that block strictly into file edits and pull request metadata.
"""

import xml.etree.ElementTree as ET
from loguru import logger

from ..constants import RESPONSE_FORMAT as FMT
from ..exceptions import ResponseParseError
from ..models import GeneratedChanges, GeneratedEdit, PullRequestMetadata


def extract_response_block(text: str) -> str:
    """
    Return the first `<response>...</response>` block of a model reply.

    The block runs from the first opening tag to the first closing tag after
    it, both tags included.

    Raises:
        ResponseParseError: If either delimiter is missing
    """
    start = text.find(FMT.OPEN_TAG)
    if start == -1:
        raise ResponseParseError(
            f"Could not find {FMT.OPEN_TAG} in model response",
            parse_stage="extract",
        )

    end = text.find(FMT.CLOSE_TAG, start)
    if end == -1:
        raise ResponseParseError(
            f"Could not find {FMT.CLOSE_TAG} after {FMT.OPEN_TAG} in model response",
            parse_stage="extract",
        )

    return text[start:end + len(FMT.CLOSE_TAG)]


def _require(parent: ET.Element, tag: str) -> ET.Element:
    child = parent.find(tag)
    if child is None:
        raise ResponseParseError(
            f"<{parent.tag}> is missing required <{tag}> element",
            parse_stage="decode",
        )
    return child


def _text_of(parent: ET.Element, tag: str) -> str:
    element = _require(parent, tag)
    if len(element):
        raise ResponseParseError(
            f"<{tag}> must contain text only, found nested <{element[0].tag}>",
            parse_stage="decode",
        )
    return element.text or ""


def parse_response_document(xml_text: str) -> GeneratedChanges:
    """
    Decode a `<response>` document into pull request metadata and edits.

    Edits keep their document order.

    Raises:
        ResponseParseError: If the XML is malformed or does not match the schema
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise ResponseParseError(
            f"Model response is not well-formed XML: {e}",
            parse_stage="decode",
            cause=e,
        )

    if root.tag != FMT.ROOT:
        raise ResponseParseError(
            f"Expected <{FMT.ROOT}> root element, got <{root.tag}>",
            parse_stage="decode",
        )

    pr_element = _require(root, FMT.PULL_REQUEST)
    pull_request = PullRequestMetadata(
        title=_text_of(pr_element, FMT.TITLE),
        body=_text_of(pr_element, FMT.BODY),
    )

    files_element = _require(root, FMT.FILES)
    file_elements = files_element.findall(FMT.FILE)
    if not file_elements:
        raise ResponseParseError(
            f"<{FMT.FILES}> must contain at least one <{FMT.FILE}> element",
            parse_stage="decode",
        )

    edits = [
        GeneratedEdit(
            path=_text_of(file_element, FMT.PATH),
            content=_text_of(file_element, FMT.CONTENT),
        )
        for file_element in file_elements
    ]

    return GeneratedChanges(pull_request=pull_request, edits=edits)


def parse_model_response(text: str) -> GeneratedChanges:
    """Extract and decode the structured payload of a model reply."""
    changes = parse_response_document(extract_response_block(text))
    logger.info(
        f"Parsed response: '{changes.pull_request.title}' with {len(changes.edits)} file edit(s)"
    )
    logger.debug(f"Parsed changes: {changes.to_dict()}")
    return changes
