# backend/melipro/services/export/csv_export.py
import csv
import io
import re
from typing import Iterable

from melipro.schemas.hive import Hive
from melipro.schemas.inspection import Inspection, InspectionDetails
from melipro.services.dates import format_date_br
from melipro.services.storage.repository import newest_first, resolve_hive

BOM = "\ufeff"
_NEWLINES = re.compile(r"\r\n|\n|\r")

HIVE_HEADER = (
    "ID", "Nome da Caixa", "Espécie", "Genética", "Data Chegada", "Últ. Intervenção Discos",
    "Saúde", "Localização/Origem", "Origem Detalhada", "Classificação", "Tipo de Caixa",
)

# 詳細列（InspectionDetails の属性名, 見出し）
DETAIL_COLUMNS = (
    ("populacao", "População"),
    ("pragas", "Pragas/Ataque"),
    ("qualidade_caixa", "Qualidade Caixa"),
    ("num_modulos", "Nº Módulos"),
    ("estoque_alimento", "Estoque Alimento"),
    ("fornecido", "Fornecido"),
    ("doou_recebeu", "Doou/Recebeu"),
    ("comportamento", "Comportamento"),
    ("caract_produtiva", "Produtividade"),
    ("tamanho_potes", "Tam. Potes"),
    ("tamanho_disco", "Tam. Disco"),
    ("modulo_aberto", "Módulo Aberto"),
    ("cria_padrao", "Cria Padrão"),
    ("fase_postura", "Fase Postura"),
    ("postura_modulo", "Postura Módulo"),
    ("modulo_vazio", "Módulo Vazio"),
    ("inclusao_modulos", "Inclusão Módulos"),
    ("acao", "Ação Realizada"),
    ("sanidade", "Sanidade"),
    ("historico_doencas", "Hist. Doenças"),
    ("preparar_para", "Preparar Para"),
)

INSPECTION_HEADER = (
    ("Data", "Nome da Caixa", "Espécie", "Tipo de Manejo")
    + tuple(title for _, title in DETAIL_COLUMNS)
    + ("Observações",)
)

DELETED_HIVE_LABEL = "Caixa Excluída"


def sanitize(text) -> str:
    # 改行は空白、; は , に置換して列構造を保つ
    if not text:
        return ""
    return _NEWLINES.sub(" ", str(text)).replace(";", ",")


def _detail_cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return "+".join(value)
    return sanitize(value)


def _write(header: tuple, rows: Iterable[list]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=";", lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return BOM + buf.getvalue()


def hives_csv(hives: list[Hive]) -> str:
    rows = [
        [
            sanitize(h.id),
            sanitize(h.name),
            h.species.value,
            (h.genetics.value if h.genetics else "Mista/Outra"),
            format_date_br(h.date_established),
            format_date_br(h.last_intervention_date),
            h.health.value,
            sanitize(h.location),
            sanitize(h.origin or "-"),
            h.classification.value,
            h.box_type,
        ]
        for h in hives
    ]
    return _write(HIVE_HEADER, rows)


def inspections_csv(hives: list[Hive], inspections: list[Inspection]) -> str:
    by_id = {h.id: h for h in hives}
    rows = []
    for insp in newest_first(inspections):
        ref = resolve_hive(insp, by_id)
        details = insp.details or InspectionDetails()
        rows.append(
            [
                format_date_br(insp.date),
                DELETED_HIVE_LABEL if ref.deleted else sanitize(ref.name),
                "-" if ref.deleted else ref.species.value,
                insp.type.value,
            ]
            + [_detail_cell(getattr(details, attr)) for attr, _ in DETAIL_COLUMNS]
            + [sanitize(insp.notes)]
        )
    return _write(INSPECTION_HEADER, rows)
