import csv
import io
from typing import List, Sequence, Tuple

from fpdf import FPDF
from openpyxl import Workbook
from openpyxl.styles import Font

from app.db.models.orders import Order

EXPORT_HEADERS = [
    "Numéro de commande",
    "Produit",
    "Statut",
    "Quantité",
    "Email",
    "Prix d'achat",
    "Prix de vente",
    "Bénéfice",
]

# format -> (media type, nom de fichier)
EXPORT_FORMATS = {
    "csv": ("text/csv; charset=utf-8", "export_commandes.csv"),
    "xlsx": (
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "export_commandes.xlsx",
    ),
    "pdf": ("application/pdf", "export_commandes.pdf"),
}

# largeurs des colonnes PDF (mm, A4 paysage)
_PDF_WIDTHS = (32, 45, 22, 18, 58, 32, 32, 32)


def format_amount(amount: float, suffix: str = "DH") -> str:
    """
    Formate un montant : 1234.5 -> '1234.50 DH'.
    Toujours deux décimales et un point décimal, contrairement à l'affichage
    de l'UI (locale fr-MA : '1 234,5 DH') : les exports restent lisibles
    par un tableur quelle que soit sa locale.
    """
    return f"{amount:.2f} {suffix}".strip()


def order_rows(orders: Sequence[Order], *, currency: str = "DH") -> List[list]:
    """Une ligne par commande, dans l'ordre de EXPORT_HEADERS (quantité numérique)."""
    return [
        [
            o.numero_commande,
            o.nom_produit,
            o.statut,
            o.quantite,
            o.email_client,
            format_amount(o.prix_achat, currency),
            format_amount(o.prix_vente, currency),
            format_amount(o.prix_vente - o.prix_achat, currency),
        ]
        for o in orders
    ]


def to_csv(orders: Sequence[Order], *, currency: str = "DH") -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    writer.writerows(order_rows(orders, currency=currency))
    return buffer.getvalue().encode("utf-8")


def to_xlsx(orders: Sequence[Order], *, currency: str = "DH") -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Commandes"
    ws.append(EXPORT_HEADERS)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in order_rows(orders, currency=currency):
        ws.append(row)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def _latin1(text: str) -> str:
    # les polices standard de FPDF ne couvrent que latin-1
    return text.encode("latin-1", "replace").decode("latin-1")


def to_pdf(orders: Sequence[Order], *, currency: str = "DH") -> bytes:
    pdf = FPDF(orientation="L", unit="mm", format="A4")
    pdf.set_margin(10)
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(0, 10, "Export des commandes")
    pdf.ln(12)

    def _row(values, *, bold: bool = False, fill: bool = False):
        pdf.set_font("Helvetica", "B" if bold else "", 8)
        for width, value in zip(_PDF_WIDTHS, values):
            pdf.cell(width, 7, _latin1(str(value)), border=1, fill=fill)
        pdf.ln(7)

    # entête indigo, texte blanc
    pdf.set_fill_color(79, 70, 229)
    pdf.set_text_color(255, 255, 255)
    _row(EXPORT_HEADERS, bold=True, fill=True)
    pdf.set_text_color(0, 0, 0)

    for values in order_rows(orders, currency=currency):
        _row(values)

    return bytes(pdf.output())


_RENDERERS = {"csv": to_csv, "xlsx": to_xlsx, "pdf": to_pdf}


def render(fmt: str, orders: Sequence[Order], *, currency: str = "DH") -> Tuple[bytes, str, str]:
    """
    Retourne (contenu, media_type, filename).
    Lève KeyError si le format est inconnu.
    """
    media_type, filename = EXPORT_FORMATS[fmt]
    return _RENDERERS[fmt](orders, currency=currency), media_type, filename
