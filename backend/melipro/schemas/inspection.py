# backend/melipro/schemas/inspection.py
from datetime import date as Date
from typing import List, Optional

from pydantic import field_validator

from .commons import (
    Acao,
    CamelModel,
    CaractProdutiva,
    Comportamento,
    CriaPadrao,
    DoouRecebeu,
    FasePostura,
    Fornecido,
    HistoricoDoencas,
    InclusaoModulos,
    InspectionType,
    ModuloVazio,
    NumModulos,
    PosicaoModulo,
    Pragas,
    PrepararPara,
    QualidadeCaixa,
    Rating,
    Species,
    Tamanho,
)

MULTI_SELECT_FIELDS = ("fornecido", "fase_postura", "postura_modulo")


class InspectionDetails(CamelModel):
    populacao: Optional[Rating] = None
    pragas: Optional[Pragas] = None
    qualidade_caixa: Optional[QualidadeCaixa] = None
    num_modulos: Optional[NumModulos] = None
    estoque_alimento: Optional[Rating] = None
    fornecido: List[Fornecido] = []
    doou_recebeu: Optional[DoouRecebeu] = None
    comportamento: Optional[Comportamento] = None
    caract_produtiva: Optional[CaractProdutiva] = None
    tamanho_potes: Optional[Tamanho] = None
    tamanho_disco: Optional[Tamanho] = None
    modulo_aberto: Optional[PosicaoModulo] = None
    cria_padrao: Optional[CriaPadrao] = None
    fase_postura: List[FasePostura] = []
    postura_modulo: List[PosicaoModulo] = []
    modulo_vazio: Optional[ModuloVazio] = None
    inclusao_modulos: Optional[InclusaoModulos] = None
    acao: Optional[Acao] = None
    sanidade: Optional[Rating] = None
    historico_doencas: Optional[HistoricoDoencas] = None
    preparar_para: Optional[PrepararPara] = None

    @field_validator(*MULTI_SELECT_FIELDS, mode="before")
    @classmethod
    def _as_unique_list(cls, v):
        # 旧データでは単一文字列のこともある
        if v is None or v == "":
            return []
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple)):
            raise ValueError("multi-select value must be a code or a list of codes")
        seen = []
        for item in v:
            if item not in seen:
                seen.append(item)
        return seen

    def filled(self) -> list[tuple[str, object]]:
        """値が入っている項目だけを (camelCase キー, 値) で返す"""
        data = self.model_dump(by_alias=True, exclude_none=True)
        return [(k, v) for k, v in data.items() if v not in ("", [])]


class Inspection(CamelModel):
    id: str
    hive_id: str
    date: str
    type: InspectionType
    notes: str = ""
    details: Optional[InspectionDetails] = None
    # 予約フィールド（保存のみで参照しない）
    next_action_date: Optional[str] = None

    @field_validator("notes", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v


class InspectionIn(CamelModel):
    hive_id: str
    date: Optional[Date] = None
    type: InspectionType
    notes: str = ""
    details: Optional[InspectionDetails] = None
    next_action_date: Optional[Date] = None

    def to_inspection(self, inspection_id: str) -> Inspection:
        the_date = self.date or Date.today()
        return Inspection(
            id=inspection_id,
            hive_id=self.hive_id,
            date=the_date.isoformat(),
            type=self.type,
            notes=self.notes,
            details=self.details,
            next_action_date=self.next_action_date.isoformat() if self.next_action_date else None,
        )


class HiveRef(CamelModel):
    """管理記録から見た巣箱。削除済み巣箱への参照は deleted=True"""

    id: str
    name: Optional[str] = None
    species: Optional[Species] = None
    deleted: bool = False


class InspectionOut(Inspection):
    hive: HiveRef
