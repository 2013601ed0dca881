"""Wire format for the print service.

The print service renders a PDF from the paper size, margin and the
committed placements. The gap is an editor-side constraint and is not
sent. Field names follow the service's camelCase JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from stickersheet.domain.entities import SheetState
from stickersheet.domain.value_objects import PaperSize, StickerSpec


class PayloadError(ValueError):
    """Raised when a print service response does not have the expected shape."""


@dataclass(frozen=True)
class PrintedSheet:
    """Generated PDF returned by the print service.

    Attributes:
        pdf_url: Public URL of the generated PDF.
        pdf_public_id: Storage identifier of the generated PDF, if reported.
    """

    pdf_url: str
    pdf_public_id: str | None = None


def build_print_request(state: SheetState) -> dict[str, Any]:
    """Build the print request body for a sheet.

    Args:
        state: Sheet whose committed placements are printed.

    Returns:
        JSON-serializable dictionary with placements in sheet order.
    """
    config = state.config
    return {
        "paperSize": PaperSize(config.paper_size).value,
        "marginMm": config.margin_mm,
        "placements": [
            {
                "stickerId": p.sticker_id,
                "xMm": p.x_mm,
                "yMm": p.y_mm,
                "rotationDeg": p.rotation_deg,
            }
            for p in state.snapshot()
        ],
    }


def parse_print_response(data: Any) -> PrintedSheet:
    """Parse the print service response.

    Raises:
        PayloadError: If the response has no PDF URL.
    """
    if not isinstance(data, dict):
        raise PayloadError("Print response must be a JSON object")
    pdf_url = data.get("pdfUrl")
    if not isinstance(pdf_url, str) or not pdf_url:
        raise PayloadError("Print response is missing 'pdfUrl'")
    public_id = data.get("pdfPublicId")
    return PrintedSheet(
        pdf_url=pdf_url,
        pdf_public_id=public_id if isinstance(public_id, str) else None,
    )


def _optional_size(value: Any) -> float | None:
    # bool is an int subclass and never a size
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def parse_sticker_catalog(data: Any) -> list[StickerSpec]:
    """Parse the sticker listing returned by the catalog endpoint.

    Entries with a missing or non-numeric size are kept with that size
    set to None, so the editor can show them and reject placing them.

    Raises:
        PayloadError: If the response has no sticker list or an entry has no id.
    """
    if not isinstance(data, dict) or not isinstance(data.get("stickers"), list):
        raise PayloadError("Sticker response must contain a 'stickers' list")

    stickers: list[StickerSpec] = []
    for index, entry in enumerate(data["stickers"]):
        if not isinstance(entry, dict) or not entry.get("id"):
            raise PayloadError(f"Sticker entry {index} has no 'id'")
        stickers.append(
            StickerSpec(
                id=str(entry["id"]),
                width_mm=_optional_size(entry.get("widthMm")),
                height_mm=_optional_size(entry.get("heightMm")),
                image_url=entry.get("imageUrl"),
                title=entry.get("title"),
            )
        )
    return stickers
