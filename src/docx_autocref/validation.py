"""
Well-formedness check for rewritten package parts.

The pipeline never parses XML itself, so this is the only place the output
is looked at as XML. It runs before anything is written so a malformed
rewrite is never saved.
"""

from lxml import etree

from .errors import ValidationError


def check_well_formed(xml_text: str, part_name: str) -> None:
    """Check that a part is well-formed XML.

    Args:
        xml_text: The part contents
        part_name: Name of the part, used in the error message

    Raises:
        ValidationError: If lxml cannot parse the part
    """
    if not xml_text:
        return

    parser = etree.XMLParser(remove_blank_text=False, resolve_entities=False, no_network=True)
    try:
        etree.fromstring(xml_text.encode("utf-8"), parser)
    except etree.XMLSyntaxError as e:
        raise ValidationError(
            f"Rewritten part '{part_name}' is not well-formed XML",
            [str(entry) for entry in e.error_log] or [str(e)],
        ) from e
