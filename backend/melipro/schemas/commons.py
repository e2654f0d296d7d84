# backend/melipro/schemas/commons.py
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Species(str, Enum):
    JATAI = "Jataí"
    MANDACAIA = "Mandaçaia"
    URUCU = "Uruçu"
    IRAI = "Iraí"
    TIUBA = "Tiúba"
    TUBUNA = "Tubuna"
    MIRIM = "Mirim"
    OUTRA = "Outra"


class HiveHealth(str, Enum):
    WEAK = "Fraca"
    MEDIUM = "Média"
    STRONG = "Forte"
    CRITICAL = "Crítica"
    EVOLVING = "Aguardando Evolução"


class HiveGenetics(str, Enum):
    HONEY = "Mel"
    PROPOLIS = "Própolis"
    MULTIPLICATION = "Multiplicação"
    MIXED = "Mista/Outra"


class HiveClassification(str, Enum):
    MATRIZ = "Matriz"
    MAE = "Mãe"
    FILHA = "Filha"
    CAPTURA = "Captura"
    RESGATE = "Resgate"


class InspectionType(str, Enum):
    FEEDING = "Alimentação"
    DIVISION = "Divisão"
    HARVEST = "Colheita"
    CLEANING = "Limpeza"
    INSPECTION = "Vistoria Geral"
    TRANSFER = "Transferência"
    INTERVENTION = "Intervenção"


BoxType = Literal["INPA", "AF", "Rústica", "Outra"]
MoveDirection = Literal["prev", "next"]

# 管理記録の詳細コード（閉じた集合）
Rating = Literal["B", "M", "R"]  # Bom / Médio / Ruim
Pragas = Literal["F", "E", "A", "N"]  # Forídeos / Enxameação / Ataque / Nenhuma
QualidadeCaixa = Literal["B", "R", "T"]  # Boa / Ruim / Trocar
NumModulos = Literal["1", "2", "3", "3+"]
Fornecido = Literal["X", "P", "C", "M"]  # Xarope / Pólen / Cera / Mel
DoouRecebeu = Literal["DD", "DC", "RD", "RC", ""]
Comportamento = Literal["C", "D"]  # Calma / Defensiva
CaractProdutiva = Literal["M", "P", "R", "G"]
Tamanho = Literal["P", "M", "G"]
PosicaoModulo = Literal["N", "SN", "2"]  # Ninho / Sobreninho / 2
CriaPadrao = Literal["N", "A"]  # Normal / Atípico
FasePostura = Literal["SV", "V", "1/2M", "M", "SM"]
ModuloVazio = Literal["SN", "M"]
InclusaoModulos = Literal["SN", "M1", "M2"]
Acao = Literal["L", "DV", "R", "C"]  # Limpeza / Divisão / Reforço / Colheita
HistoricoDoencas = Literal["F", "MS", "L", "V"]
PrepararPara = Literal["IN", "M", "V", "R"]  # Indução / Multiplicação / Venda / Reforço


class CamelModel(BaseModel):
    """保存形式・API ともに camelCase キー"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
