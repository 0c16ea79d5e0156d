"""
Modelos (Snapshots) do Motor Financeiro

Representam, de forma tipada e imutável, os registos que a aplicação de
secretaria sincroniza via REST. Os nomes dos campos são em português, mas os
aliases seguem as chaves do JSON original (camelCase), então tanto
`Aluno(data_matricula=...)` quanto `Aluno.model_validate({'matriculationDate': ...})`
funcionam.

Todos os valores padrão que antes ficavam espalhados em `|| x` / `?? x`
estão declarados aqui, campo a campo.
"""

from datetime import date, datetime
from typing import List, Literal, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from seismart.core.constants import (
    DIA_LIMITE_PADRAO,
    MES_FIM_PADRAO,
    MES_INICIO_PADRAO,
    MOEDA_PADRAO,
    PERFIL_DESCONTO_PARCIAL,
    PERFIL_ISENTO_TOTAL,
    PERFIL_SEM_MULTA,
    STATUS_ATIVO,
)

StatusAluno = Literal['Ativo', 'Inativo', 'Transferido', 'Suspenso']
StatusPerfil = Literal['Normal', 'Isento Total', 'Sem Multa', 'Desconto Parcial']
StatusAnoLetivo = Literal['Planeado', 'Em Curso', 'Concluído']


class ModeloSnapshot(BaseModel):
    """Base comum: imutável, aceita nome ou alias e ignora chaves desconhecidas."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra='ignore')


def _lista_ou_vazia(valor):
    # O store grava `null` para listas ainda não preenchidas
    return [] if valor is None else valor


def _apenas_data(valor):
    # O store grava algumas datas com `toISOString()` (ex.: 2024-03-05T10:23:45.123Z)
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, str) and 'T' in valor:
        return valor.split('T')[0]
    return valor


def _valor_ou_zero(valor):
    return 0 if valor is None else valor


# === ALUNO E REGISTOS ===

class RegistoPagamento(ModeloSnapshot):
    ano_letivo: int = Field(..., alias='academicYear')
    valor: float = Field(0, ge=0, alias='amount')
    # Tipos fora da lista conhecida (ex.: 'Transporte') são aceitos
    tipo: str = Field('Outros', alias='type')

    @field_validator('valor', mode='before')
    @classmethod
    def valor_nulo(cls, valor):
        return _valor_ou_zero(valor)


class CobrancaExtra(ModeloSnapshot):
    data: date = Field(..., alias='date')
    valor: float = Field(..., alias='amount')
    pago: bool = Field(False, alias='isPaid')

    @field_validator('data', mode='before')
    @classmethod
    def data_sem_hora(cls, valor):
        return _apenas_data(valor)

    @field_validator('valor', mode='before')
    @classmethod
    def valor_nulo(cls, valor):
        return _valor_ou_zero(valor)


class PerfilFinanceiro(ModeloSnapshot):
    status: StatusPerfil = 'Normal'
    percentual_desconto: float = Field(0, ge=0, le=100, alias='discountPercentage')
    tipos_afetados: List[str] = Field(default_factory=list, alias='affectedTypes')

    @field_validator('tipos_afetados', mode='before')
    @classmethod
    def tipos_nulos(cls, valor):
        return _lista_ou_vazia(valor)

    @field_validator('percentual_desconto', mode='before')
    @classmethod
    def desconto_nulo(cls, valor):
        return 0 if valor is None else valor

    @property
    def isento_de_multa(self) -> bool:
        return self.status in (PERFIL_SEM_MULTA, PERFIL_ISENTO_TOTAL)

    def taxa_efetiva(self, tipo: str, valor_base: float) -> float:
        """
        Aplica o perfil financeiro sobre uma taxa base.

        'Isento Total' zera qualquer taxa; 'Desconto Parcial' só reduz os
        tipos listados em `tipos_afetados`. Os demais perfis não alteram o valor.
        """
        if self.status == PERFIL_ISENTO_TOTAL:
            return 0.0
        if self.status == PERFIL_DESCONTO_PARCIAL and tipo in self.tipos_afetados:
            return valor_base * (1 - self.percentual_desconto / 100)
        return valor_base


class Aluno(ModeloSnapshot):
    id: str = ''
    nome: str = Field('', alias='name')
    data_matricula: date = Field(..., alias='matriculationDate')
    classe_pretendida: Optional[str] = Field(None, alias='desiredClass')
    status: StatusAluno = STATUS_ATIVO
    data_suspensao: Optional[date] = Field(None, alias='suspensionDate')
    perfil_financeiro: PerfilFinanceiro = Field(default_factory=PerfilFinanceiro, alias='financialProfile')
    pagamentos: List[RegistoPagamento] = Field(default_factory=list, alias='payments')
    cobrancas_extras: List[CobrancaExtra] = Field(default_factory=list, alias='extraCharges')

    @field_validator('pagamentos', 'cobrancas_extras', mode='before')
    @classmethod
    def listas_nulas(cls, valor):
        return _lista_ou_vazia(valor)

    @field_validator('perfil_financeiro', mode='before')
    @classmethod
    def perfil_padrao(cls, valor):
        return PerfilFinanceiro() if valor is None else valor

    @field_validator('data_matricula', mode='before')
    @classmethod
    def matricula_sem_hora(cls, valor):
        return _apenas_data(valor)

    @field_validator('data_suspensao', mode='before')
    @classmethod
    def suspensao_vazia(cls, valor):
        # Formulários gravam '' quando o campo de data é limpo
        return None if valor == '' else _apenas_data(valor)


# === CONFIGURAÇÃO DA ESCOLA ===

class AnoLetivo(ModeloSnapshot):
    ano: int = Field(..., alias='year')
    status: StatusAnoLetivo = 'Planeado'
    mes_inicio: int = Field(MES_INICIO_PADRAO, ge=1, le=12, alias='startMonth')
    mes_fim: int = Field(MES_FIM_PADRAO, ge=1, le=12, alias='endMonth')

    @field_validator('mes_inicio', mode='before')
    @classmethod
    def inicio_padrao(cls, valor):
        # 0 ou ausente significa "não configurado"
        return valor or MES_INICIO_PADRAO

    @field_validator('mes_fim', mode='before')
    @classmethod
    def fim_padrao(cls, valor):
        return valor or MES_FIM_PADRAO


class PropinaPorClasse(ModeloSnapshot):
    classe: str = Field(..., alias='classLevel')
    mensalidade: float = Field(..., ge=0, alias='monthlyFee')
    taxa_matricula: float = Field(..., ge=0, alias='enrollmentFee')
    taxa_renovacao: float = Field(..., ge=0, alias='renewalFee')


class PropinaBase(NamedTuple):
    """Valores base já resolvidos para uma classe (antes do perfil financeiro)."""
    mensalidade: float
    matricula: float
    renovacao: float


class ConfiguracoesFinanceiras(ModeloSnapshot):
    mensalidade: float = Field(..., ge=0, alias='monthlyFee')
    taxa_matricula: float = Field(..., ge=0, alias='enrollmentFee')
    taxa_renovacao: float = Field(..., ge=0, alias='renewalFee')
    propinas_por_classe: List[PropinaPorClasse] = Field(default_factory=list, alias='classSpecificFees')
    dia_limite_pagamento: int = Field(DIA_LIMITE_PADRAO, ge=1, le=31, alias='monthlyPaymentLimitDay')
    multa_atraso_percentual: float = Field(0, ge=0, alias='latePaymentPenaltyPercent')
    moeda: str = Field(MOEDA_PADRAO, alias='currency')

    @field_validator('propinas_por_classe', mode='before')
    @classmethod
    def classes_nulas(cls, valor):
        return _lista_ou_vazia(valor)

    @field_validator('dia_limite_pagamento', mode='before')
    @classmethod
    def dia_padrao(cls, valor):
        return valor or DIA_LIMITE_PADRAO

    @field_validator('multa_atraso_percentual', mode='before')
    @classmethod
    def multa_nula(cls, valor):
        return 0 if valor is None else valor

    @field_validator('moeda', mode='before')
    @classmethod
    def moeda_padrao(cls, valor):
        return valor or MOEDA_PADRAO


# === RESULTADO ===

class ResultadoSaldo(ModeloSnapshot):
    saldo: float = 0.0
    devedor: bool = False

    @property
    def divida(self) -> float:
        """Valor absoluto da dívida (0 quando o saldo não é negativo)."""
        return -self.saldo if self.saldo < 0 else 0.0
