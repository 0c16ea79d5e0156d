"""
Camada de Serviço (Service Layer) Financeira

Consumidores do motor de saldo: o filtro financeiro da listagem de alunos,
o fluxo de trancamento de matrícula (bloqueado enquanto houver dívida) e o
resumo de inadimplência usado em relatórios.

Nenhuma função aqui altera os snapshots recebidos; o trancamento devolve
um novo `Aluno` para que a aplicação de secretaria o persista.
"""

from datetime import date, datetime
from typing import Iterable, List, NamedTuple, Optional, Union

from seismart.core.constants import (
    FILTRO_DEVEDORES,
    FILTRO_TODOS,
    FILTROS_FINANCEIROS,
    MOEDA_PADRAO,
    STATUS_SUSPENSO,
)
from seismart.core.logger import get_logger
from seismart.financeiro.modelos import Aluno, ConfiguracoesFinanceiras
from seismart.financeiro.saldo import calcular_saldo, data_de_hoje

logger = get_logger(__name__)


class MatriculaBloqueadaError(Exception):
    """O aluno tem dívida acima da tolerância e não pode trancar a matrícula."""

    def __init__(self, aluno: Aluno, divida: float, moeda: str = MOEDA_PADRAO):
        self.aluno = aluno
        self.divida = divida
        self.moeda = moeda
        super().__init__(
            f"BLOQUEADO: Não é possível trancar a matrícula. "
            f"O aluno possui uma dívida estimada de {divida:,.2f} {moeda}. "
            f"Por favor, regularize a situação financeira antes de suspender."
        )


class ResumoInadimplencia(NamedTuple):
    total_alunos: int
    total_devedores: int
    divida_total: float
    moeda: str


def _moeda(configuracoes) -> str:
    if isinstance(configuracoes, ConfiguracoesFinanceiras):
        return configuracoes.moeda
    if configuracoes:
        return configuracoes.get('currency') or configuracoes.get('moeda') or MOEDA_PADRAO
    return MOEDA_PADRAO


def filtrar_por_situacao_financeira(alunos: Iterable[Aluno], filtro: str, configuracoes,
                                    anos_letivos, data_referencia: Optional[date] = None) -> List[Aluno]:
    """
    Aplica o filtro financeiro da listagem.

    Sem configurações ou anos letivos o filtro é ignorado e todos os alunos
    são devolvidos, como na listagem da secretaria.
    """
    if filtro not in FILTROS_FINANCEIROS:
        raise ValueError(f"Filtro financeiro desconhecido: {filtro!r}")

    alunos = list(alunos)
    anos_letivos = list(anos_letivos or [])
    if filtro == FILTRO_TODOS or configuracoes is None or not anos_letivos:
        return alunos

    querem_devedores = filtro == FILTRO_DEVEDORES
    return [
        aluno for aluno in alunos
        if calcular_saldo(aluno, configuracoes, anos_letivos, data_referencia).devedor == querem_devedores
    ]


def filtrar_alunos(alunos: Iterable[Aluno], termo: str = '', status: str = FILTRO_TODOS,
                   filtro_financeiro: str = FILTRO_TODOS, configuracoes=None, anos_letivos=None,
                   data_referencia: Optional[date] = None) -> List[Aluno]:
    """
    Filtro combinado da listagem: status, situação financeira e busca textual
    (nome, matrícula ou classe pretendida, sem diferenciar maiúsculas).
    """
    selecionados = list(alunos)

    if status != FILTRO_TODOS:
        selecionados = [a for a in selecionados if a.status == status]

    selecionados = filtrar_por_situacao_financeira(
        selecionados, filtro_financeiro, configuracoes, anos_letivos, data_referencia
    )

    if termo:
        termo = termo.lower()
        selecionados = [
            a for a in selecionados
            if termo in a.nome.lower()
            or termo in a.id.lower()
            or termo in (a.classe_pretendida or '').lower()
        ]

    return selecionados


def trancar_matricula(aluno: Aluno, configuracoes, anos_letivos,
                      data_referencia: Optional[Union[date, datetime]] = None) -> Aluno:
    """
    Tranca (suspende) a matrícula do aluno.

    Calcula o saldo primeiro: havendo dívida, levanta `MatriculaBloqueadaError`.
    Caso contrário, devolve uma cópia com status 'Suspenso' e a data da
    suspensão; a partir dela as mensalidades deixam de ser cobradas.
    """
    if aluno.status == STATUS_SUSPENSO:
        raise ValueError(f"A matrícula do aluno {aluno.id} já está trancada.")

    anos_letivos = list(anos_letivos or [])

    if data_referencia is None:
        data_referencia = data_de_hoje()
    elif isinstance(data_referencia, datetime):
        data_referencia = data_referencia.date()

    resultado = calcular_saldo(aluno, configuracoes, anos_letivos, data_referencia)
    if resultado.devedor:
        logger.warning(f"Trancamento bloqueado: aluno {aluno.id} com dívida de {resultado.divida:.2f}")
        raise MatriculaBloqueadaError(aluno, resultado.divida, _moeda(configuracoes))

    logger.info(f"Matrícula trancada: aluno {aluno.id} em {data_referencia.isoformat()}")
    return aluno.model_copy(update={'status': STATUS_SUSPENSO, 'data_suspensao': data_referencia})


def resumo_inadimplencia(alunos: Iterable[Aluno], configuracoes, anos_letivos,
                         data_referencia: Optional[date] = None) -> ResumoInadimplencia:
    """Quantos alunos estão devendo e quanto somam as dívidas."""
    # O mesmo snapshot de anos letivos é lido uma vez por aluno
    anos_letivos = list(anos_letivos or [])
    total_alunos = 0
    total_devedores = 0
    divida_total = 0.0

    for aluno in alunos:
        total_alunos += 1
        resultado = calcular_saldo(aluno, configuracoes, anos_letivos, data_referencia)
        if resultado.devedor:
            total_devedores += 1
            divida_total += resultado.divida

    return ResumoInadimplencia(total_alunos, total_devedores, divida_total, _moeda(configuracoes))
