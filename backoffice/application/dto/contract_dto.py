"""
Contract DTOs for the backend wire format.
"""

from typing import List, Optional
from pydantic import Field, field_validator

from backoffice.application.dto.base_dto import ResponseDTO, PayloadDTO, PageResponseDTO


class ContractTypeDTO(ResponseDTO):
    """Contract type catalogue entry."""

    contract_type_id: int = Field(alias="contratoTipoId")
    description: str = Field(alias="descricao")
    recurring: bool = Field(default=False, alias="recorrente")
    nature: str = Field(default="R", alias="tipo", description="R revenue, D expense")


class PersonDTO(ResponseDTO):
    person_id: Optional[int] = Field(default=None, alias="pessoaId")
    name: Optional[str] = Field(default=None, alias="nome")
    document: Optional[str] = Field(default=None, alias="documento")
    entity_id: Optional[int] = Field(default=None, alias="entidadeId")


class RoleHolderDTO(ResponseDTO):
    """Client, partner or shareholder record; only one of the ids is present."""

    client_role_id: Optional[int] = Field(default=None, alias="clienteInfoId")
    partner_role_id: Optional[int] = Field(default=None, alias="parceiroInfoId")
    shareholder_role_id: Optional[int] = Field(default=None, alias="socioInfoId")
    person: Optional[PersonDTO] = Field(default=None, alias="pessoa")
    name: Optional[str] = Field(default=None, alias="nome")
    document: Optional[str] = Field(default=None, alias="documento")
    entity_id: Optional[int] = Field(default=None, alias="entidadeId")


class BankDTO(ResponseDTO):
    bank_id: Optional[int] = Field(default=None, alias="bancoId")
    name: Optional[str] = Field(default=None, alias="nome")
    code: Optional[str] = Field(default=None, alias="codigo")


class BankAccountDTO(ResponseDTO):
    bank_account_id: int = Field(alias="entidadeContaBancariaId")
    entity_id: Optional[int] = Field(default=None, alias="entidadeId")
    bank: Optional[BankDTO] = Field(default=None, alias="banco")
    bank_name: Optional[str] = Field(default=None, alias="bancoNome")
    agency: Optional[str] = Field(default=None, alias="agencia")
    account_number: Optional[str] = Field(default=None, alias="conta")


class ContractItemDTO(ResponseDTO):
    """Contract item as returned by the backend."""

    contract_item_id: Optional[int] = Field(default=None, alias="contratoItemId")
    description: str = Field(default="", alias="descricao")
    amount: float = Field(default=0.0, alias="valor")
    start_date: Optional[str] = Field(default=None, alias="dataIni")
    end_date: Optional[str] = Field(default=None, alias="dataFim")
    due_day: int = Field(default=1, alias="diaVencimento")
    active: bool = Field(default=True, alias="ativo")
    generate_invoice: bool = Field(default=False, alias="gerarBoleto")
    interest_rate: float = Field(default=0.0, alias="juros")
    late_fee_rate: float = Field(default=0.0, alias="mora")
    bank_instructions: Optional[str] = Field(default=None, alias="instrucoesBanco")
    operation: Optional[str] = Field(default=None, alias="operacao")
    bank_account_id: Optional[int] = Field(default=None, alias="entidadeContaBancariaId")
    due_month: Optional[int] = Field(default=0, alias="mesVencimento")
    due_year: Optional[int] = Field(default=0, alias="anoVencimento")

    @field_validator("amount", "interest_rate", "late_fee_rate", mode="before")
    @classmethod
    def parse_numeric(cls, v):
        """The backend serializes decimals as strings."""
        if v is None or v == "":
            return 0.0
        return v


class ContractResponseDTO(ResponseDTO):
    """Contract as returned by the backend."""

    contract_id: Optional[int] = Field(default=None, alias="contratoId")
    contract_number: Optional[str] = Field(default=None, alias="numeroContrato")
    client_role_id: Optional[int] = Field(default=None, alias="clienteInfoId")
    partner_role_id: Optional[int] = Field(default=None, alias="parceiroInfoId")
    shareholder_role_id: Optional[int] = Field(default=None, alias="socioInfoId")
    client: Optional[PersonDTO] = Field(default=None, alias="cliente")
    partner: Optional[PersonDTO] = Field(default=None, alias="parceiro")
    shareholder: Optional[PersonDTO] = Field(default=None, alias="socio")
    contract_type_id: Optional[int] = Field(default=None, alias="contratoTipoId")
    contract_type: Optional[ContractTypeDTO] = Field(default=None, alias="contratoTipo")
    description: str = Field(default="", alias="descricao")
    amount: float = Field(default=0.0, alias="valor")
    active: bool = Field(default=True, alias="ativo")
    contract_url: Optional[str] = Field(default=None, alias="urlContrato")
    items: List[ContractItemDTO] = Field(default_factory=list, alias="itens")

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, v):
        if v is None or v == "":
            return 0.0
        return v

    @field_validator("items", mode="before")
    @classmethod
    def parse_items(cls, v):
        return v or []


class ContractPageDTO(PageResponseDTO[ContractResponseDTO]):
    pass


class ContractItemPayloadDTO(PayloadDTO):
    """
    Sanitized item sent to the backend.

    ``end_date`` and ``bank_instructions`` are only set when non-empty;
    ``due_month``/``due_year`` are always sent.
    """

    contract_item_id: Optional[int] = Field(default=None, alias="contratoItemId")
    description: str = Field(alias="descricao")
    amount: float = Field(alias="valor", ge=0, le=9999999.99)
    start_date: Optional[str] = Field(default=None, alias="dataIni")
    end_date: Optional[str] = Field(default=None, alias="dataFim")
    due_day: int = Field(alias="diaVencimento", ge=1, le=28)
    active: bool = Field(alias="ativo")
    generate_invoice: bool = Field(alias="gerarBoleto")
    interest_rate: float = Field(alias="juros", ge=0, le=100)
    late_fee_rate: float = Field(alias="mora", ge=0, le=100)
    bank_instructions: Optional[str] = Field(default=None, alias="instrucoesBanco")
    operation: str = Field(alias="operacao", pattern="^[CD]$")
    bank_account_id: Optional[int] = Field(default=None, alias="entidadeContaBancariaId")
    due_month: int = Field(default=0, alias="mesVencimento")
    due_year: int = Field(default=0, alias="anoVencimento")


class ContractPayloadDTO(PayloadDTO):
    """
    Contract body for create (every field) and partial update (changed fields only).
    """

    contract_number: Optional[str] = Field(default=None, alias="numeroContrato")
    client_role_id: Optional[int] = Field(default=None, alias="clienteInfoId")
    partner_role_id: Optional[int] = Field(default=None, alias="parceiroInfoId")
    shareholder_role_id: Optional[int] = Field(default=None, alias="socioInfoId")
    contract_type_id: Optional[int] = Field(default=None, alias="contratoTipoId")
    description: Optional[str] = Field(default=None, alias="descricao")
    amount: Optional[float] = Field(default=None, alias="valor")
    active: Optional[bool] = Field(default=None, alias="ativo")
    contract_url: Optional[str] = Field(default=None, alias="urlContrato")
    items: Optional[List[ContractItemPayloadDTO]] = Field(default=None, alias="itens")
