from __future__ import annotations

from typing import Optional

from gedcom_codec.core.context import ParseContext
from gedcom_codec.core.exceptions import UnsupportedCharsetError
from gedcom_codec.grammar import FAM, HEAD, INDI, READABLE_VERSION_PREFIXES, SUPPORTED_CHARSET
from gedcom_codec.loader import GEDCOMNode, GEDCOMTree

# Spellings of UTF-8 seen in the wild.
_UTF8_ALIASES = {"UTF-8", "UTF8"}


def check_header(tree: GEDCOMTree, ctx: ParseContext) -> Optional[GEDCOMNode]:
    """
    Validate the HEAD record and record what it declares in ``ctx.header``.

    A missing HEAD, GEDC/VERS or CHAR is tolerated with a warning, as is a
    version outside 5.5.x and 7.x; a character set other than UTF-8 is a
    hard error.

    Returns the HEAD node, or None.
    """
    heads = tree.find_records_by_tag(HEAD)
    if not heads:
        ctx.warn("Missing HEAD record; reading leniently")
        return None

    head = heads[0]
    for extra in heads[1:]:
        ctx.warn("Additional HEAD record ignored", extra.lineno)

    position = tree.position(head)
    if any(r.tag in (INDI, FAM) for r in tree.records[:position]):
        ctx.warn("HEAD record should precede all INDI and FAM records", head.lineno)

    ctx.header["source"] = head.first_value("SOUR") or None

    gedc = head.find_first("GEDC")
    version = gedc.first_value("VERS") if gedc is not None else None
    ctx.header["version"] = version or None
    if not version:
        ctx.warn("HEAD has no GEDC/VERS; assuming 5.5.1", head.lineno)
    elif not version.strip().startswith(READABLE_VERSION_PREFIXES):
        ctx.warn(f"GEDCOM version {version.strip()} is neither 5.5.x nor 7.x; reading anyway", gedc.lineno)

    char_node = head.find_first("CHAR")
    if char_node is None or not char_node.value.strip():
        ctx.header["charset"] = None
        ctx.warn("HEAD has no CHAR; assuming UTF-8", head.lineno)
        return head

    charset = char_node.value.strip()
    ctx.header["charset"] = charset
    if charset.upper() not in _UTF8_ALIASES:
        ctx.fail(UnsupportedCharsetError(charset, line=char_node.lineno))
    elif charset.upper() != SUPPORTED_CHARSET:
        ctx.logger.debug("Accepting charset spelling %r as UTF-8", charset)

    return head
