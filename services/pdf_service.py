import logging
from pathlib import Path
from typing import Optional, Dict, List
from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError
import config
from core.registry import MemberRegistry
from models.member import Member
from services.file_manager import ensure_folder
from services.report_service import format_member_info

logger = logging.getLogger(__name__)


def create_member_card(save_path: Path, member: Member) -> None:
    """
    Generates a standardized PDF card for a gym member.

    Args:
        save_path (Path): The full path where the PDF will be saved.
        member (Member): The member to print.
    """
    save_path = Path(save_path)
    ensure_folder(save_path.parent)
    c = canvas.Canvas(str(save_path), pagesize=A4)
    w, h = A4
    y = h - 50

    # --- HEADER ---
    c.setFont("Helvetica-Bold", 18)
    c.setFillColorRGB(0.16, 0.5, 0.73)
    c.drawString(60, y, f"{config.GYM_NAME} ({member.id})")

    y -= 30
    c.setFont("Helvetica", 12)
    c.setFillColorRGB(0, 0, 0)

    # --- BODY FIELDS ---
    for line in format_member_info(member).splitlines():
        c.drawString(60, y, line)
        y -= 18

    c.save()


def parse_member_card(pdf_path: Path) -> Optional[Dict[str, str]]:
    """
    Reads a generated card and extracts the labelled lines back into a dictionary.
    Keys are the labels in snake case, e.g. 'Membership Start Date' -> 'membership_start_date'.
    """
    pdf_path = Path(pdf_path)
    try:
        reader = PdfReader(str(pdf_path))
        text = "".join(p.extract_text() or "" for p in reader.pages)
    except (OSError, PdfReadError) as e:
        logger.warning("Could not read member card %s: %s", pdf_path, e)
        return None

    d: Dict[str, str] = {}
    for ln in text.splitlines():
        if ": " not in ln:
            continue
        label, value = ln.split(": ", 1)
        d[label.strip().lower().replace(" ", "_")] = value.strip()

    # Fallback: If ID wasn't found in text, use filename
    if not d.get("id"):
        d["id"] = pdf_path.stem

    return d


def export_member_cards(registry: MemberRegistry, folder: Optional[Path] = None) -> List[str]:
    """
    Writes one card per member as '<id>.pdf' (config.CARDS_FOLDER by default).

    Returns:
        List[str]: Paths of the cards written, in registry order.
    """
    target = Path(folder) if folder is not None else config.CARDS_FOLDER
    if target is None:
        raise ValueError("Cards folder not set. Call init_paths() first.")

    paths = []
    for member in registry:
        save_path = target / f"{member.id}.pdf"
        create_member_card(save_path, member)
        paths.append(str(save_path))

    logger.info("Exported %d member cards to %s", len(paths), target)
    return paths
