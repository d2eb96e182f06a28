"""
Movement DTOs for the backend wire format.
"""

from typing import List, Optional
from pydantic import Field, field_validator

from backoffice.application.dto.base_dto import ResponseDTO, PayloadDTO


def _zero_if_blank(v):
    if v is None or v == "":
        return 0.0
    return v


class MovementDTO(ResponseDTO):
    """Movement row of the receivable/payable ledgers."""

    movement_id: int = Field(alias="movimentoId")
    contract_item_id: Optional[int] = Field(default=None, alias="contratoItemId")
    status: Optional[str] = Field(default=None)
    due_date: Optional[str] = Field(default=None, alias="dataVencimento")
    payment_date: Optional[str] = Field(default=None, alias="dataPagamento")
    ledger_date: Optional[str] = Field(default=None, alias="dataLancamento")
    face_amount: float = Field(default=0.0, alias="valor")
    effective_amount: Optional[float] = Field(default=None, alias="valorEfetivo")
    settled: bool = Field(default=False, alias="pago")
    proof_url: Optional[str] = Field(default=None, alias="urlComprovante")
    description: Optional[str] = Field(default=None, alias="descricao")
    contract_id: Optional[int] = Field(default=None, alias="contratoId")
    contract_number: Optional[str] = Field(default=None, alias="numeroContrato")
    contract_url: Optional[str] = Field(default=None, alias="urlContrato")
    interest_rate: float = Field(default=0.0, alias="juros")
    late_fee_rate: float = Field(default=0.0, alias="mora")
    generate_invoice: bool = Field(default=False, alias="gerarBoleto")
    overdue_days: Optional[int] = Field(default=None, alias="diasAtraso")
    late_fee_amount: float = Field(default=0.0, alias="vrMora")
    interest_amount: float = Field(default=0.0, alias="vrJuros")
    corrected_total: Optional[float] = Field(default=None, alias="valorTotalComCorrecoes")
    party_name: Optional[str] = Field(default=None, alias="nome")
    party_document: Optional[str] = Field(default=None, alias="documento")
    kind: Optional[str] = Field(default=None, alias="tipo")
    role_code: Optional[str] = Field(default=None, alias="tipoContrato")
    contract_amount: Optional[float] = Field(default=None, alias="valorContrato")
    contract_active: Optional[bool] = Field(default=None, alias="contratoAtivo")

    @field_validator(
        "face_amount", "interest_rate", "late_fee_rate", "late_fee_amount", "interest_amount",
        mode="before"
    )
    @classmethod
    def parse_numeric(cls, v):
        return _zero_if_blank(v)


class MovementTotalsDTO(ResponseDTO):
    """Aggregates over the filtered set; ``valorRecebido`` for receivables, ``valorPago`` for payables."""

    total_records: int = Field(default=0, alias="totalRegistros")
    face_total: float = Field(default=0.0, alias="valorTotal")
    received_total: Optional[float] = Field(default=None, alias="valorRecebido")
    paid_total: Optional[float] = Field(default=None, alias="valorPago")
    open_total: float = Field(default=0.0, alias="valorEmAberto")
    late_fee_total: float = Field(default=0.0, alias="totalMora")
    interest_total: float = Field(default=0.0, alias="totalJuros")
    corrected_total: float = Field(default=0.0, alias="valorTotalComCorrecoes")

    @field_validator(
        "face_total", "open_total", "late_fee_total", "interest_total", "corrected_total",
        mode="before"
    )
    @classmethod
    def parse_numeric(cls, v):
        return _zero_if_blank(v)


class MovementListResponseDTO(ResponseDTO):
    data: List[MovementDTO] = Field(default_factory=list)
    totals: MovementTotalsDTO = Field(default_factory=MovementTotalsDTO, alias="totalizadores")


class MovementStatusListDTO(ResponseDTO):
    status: List[str] = Field(default_factory=list)


class SettlementPayloadDTO(PayloadDTO):
    """Body of the payment update; ``dataPagamento`` is only sent when settled."""

    settled: bool = Field(alias="pago")
    payment_date: Optional[str] = Field(default=None, alias="dataPagamento")
    effective_amount: Optional[float] = Field(default=None, alias="valorEfetivo", ge=0)


class ProofUploadPayloadDTO(PayloadDTO):
    file_base64: str = Field(alias="arquivo")
    file_name: str = Field(alias="nomeArquivo", min_length=1)
    file_type: str = Field(alias="tipoArquivo", pattern="^(pdf|jpg|jpeg|png)$")


class ProofUploadResponseDTO(ResponseDTO):
    proof_url: str = Field(alias="urlComprovante")


class MovementGenerationPayloadDTO(PayloadDTO):
    entity_id: int = Field(alias="entidadeId")
    month: int = Field(alias="mes", ge=1, le=12)
    year: int = Field(alias="ano", ge=2000)
