"""
Motor de Cálculo de Saldo (Balance Calculator)

Determina, para o ano letivo ativo, quanto o aluno pagou contra o que já
deveria ter pago (matrícula/renovação, mensalidades vencidas com multa e
cobranças extras em aberto).

A função é pura: só lê os snapshots recebidos e a data de referência.
Qualquer falha interna (ex.: data malformada no store) vira saldo neutro,
para que um único registo ruim nunca derrube a listagem inteira.
"""

from datetime import date, datetime
from typing import Iterable, Mapping, Optional, Union

from config import Config
from seismart.core.constants import (
    ANO_EM_CURSO,
    STATUS_INATIVO,
    STATUS_SUSPENSO,
    TIPO_MATRICULA,
    TIPO_MENSALIDADE,
    TIPO_RENOVACAO,
    TOLERANCIA_DEVEDOR,
)
from seismart.core.logger import get_logger
from seismart.financeiro.modelos import (
    Aluno,
    AnoLetivo,
    ConfiguracoesFinanceiras,
    PropinaBase,
    ResultadoSaldo,
)

logger = get_logger(__name__)


def _como_modelo(modelo, dados):
    """Aceita tanto a instância já validada quanto o dict cru vindo do store."""
    if isinstance(dados, modelo):
        return dados
    return modelo.model_validate(dados)


def data_de_hoje() -> date:
    """'Hoje' no fuso horário da escola."""
    return datetime.now(Config.ZONA).date()


def resolver_propinas(configuracoes: ConfiguracoesFinanceiras, classe: Optional[str]) -> PropinaBase:
    """
    Resolve os valores base (mensalidade, matrícula, renovação) de uma classe.

    Uma entrada em `propinas_por_classe` com a mesma classe substitui os três
    valores globais; sem correspondência, valem os valores da escola.
    """
    if classe:
        for especifica in configuracoes.propinas_por_classe:
            if especifica.classe == classe:
                return PropinaBase(
                    mensalidade=especifica.mensalidade,
                    matricula=especifica.taxa_matricula,
                    renovacao=especifica.taxa_renovacao,
                )

    return PropinaBase(
        mensalidade=configuracoes.mensalidade,
        matricula=configuracoes.taxa_matricula,
        renovacao=configuracoes.taxa_renovacao,
    )


def obter_ano_ativo(anos_letivos: Iterable[AnoLetivo]) -> Optional[AnoLetivo]:
    """Ano 'Em Curso'; se nenhum estiver em curso, o primeiro da lista."""
    anos = list(anos_letivos)
    if not anos:
        return None
    return next((a for a in anos if a.status == ANO_EM_CURSO), anos[0])


def _mes_suspenso(aluno: Aluno, ano: int, mes: int) -> bool:
    if aluno.status != STATUS_SUSPENSO or aluno.data_suspensao is None:
        return False
    suspensao = aluno.data_suspensao
    if ano == suspensao.year and mes > suspensao.month:
        return True
    return ano > suspensao.year


def _mes_atrasado(ano: int, mes: int, hoje: date, dia_limite: int) -> bool:
    # Num ano letivo já encerrado, todos os meses estão em atraso
    if ano < hoje.year:
        return True
    return mes < hoje.month or (mes == hoje.month and hoje.day > dia_limite)


def _total_mensalidades(aluno: Aluno, configuracoes: ConfiguracoesFinanceiras,
                        ano_ativo: AnoLetivo, mensalidade_base: float, hoje: date) -> float:
    ano = ano_ativo.ano
    perfil = aluno.perfil_financeiro

    # Ano letivo futuro ainda não tem mensalidade vencida
    if ano > hoje.year:
        return 0.0

    mes_inicial = ano_ativo.mes_inicio
    if aluno.data_matricula.year == ano:
        # A cobrança começa no mês seguinte ao da matrícula
        mes_inicial = max(mes_inicial, aluno.data_matricula.month + 1)

    mes_limite = min(hoje.month, ano_ativo.mes_fim) if ano == hoje.year else ano_ativo.mes_fim

    total = 0.0
    for mes in range(mes_inicial, mes_limite + 1):
        if _mes_suspenso(aluno, ano, mes):
            continue

        valor = perfil.taxa_efetiva(TIPO_MENSALIDADE, mensalidade_base)

        if (_mes_atrasado(ano, mes, hoje, configuracoes.dia_limite_pagamento)
                and configuracoes.multa_atraso_percentual > 0
                and not perfil.isento_de_multa):
            valor += valor * (configuracoes.multa_atraso_percentual / 100)

        total += valor

    return total


def _calcular(aluno: Aluno, configuracoes: ConfiguracoesFinanceiras,
              ano_ativo: AnoLetivo, hoje: date) -> ResultadoSaldo:
    ano = ano_ativo.ano

    # 1. Créditos: o que foi pago neste ano letivo
    total_pago = sum(p.valor for p in aluno.pagamentos if p.ano_letivo == ano)

    # Recém-matriculado no mês corrente e sem pagamentos: ainda não é devedor
    matricula = aluno.data_matricula
    if total_pago == 0 and (matricula.year, matricula.month) == (hoje.year, hoje.month):
        return ResultadoSaldo()

    # 2. Débitos: obrigações vencidas até a data de referência
    perfil = aluno.perfil_financeiro
    propinas = resolver_propinas(configuracoes, aluno.classe_pretendida)
    total_obrigacoes = 0.0

    # A. Matrícula / Renovação
    if matricula.year == ano:
        total_obrigacoes += perfil.taxa_efetiva(TIPO_MATRICULA, propinas.matricula)
    elif matricula.year < ano and aluno.status != STATUS_INATIVO:
        total_obrigacoes += perfil.taxa_efetiva(TIPO_RENOVACAO, propinas.renovacao)

    # B. Mensalidades
    total_obrigacoes += _total_mensalidades(aluno, configuracoes, ano_ativo, propinas.mensalidade, hoje)

    # C. Taxas extras e danos em aberto (sem desconto de perfil)
    total_obrigacoes += sum(
        c.valor for c in aluno.cobrancas_extras
        if c.data.year == ano and not c.pago
    )

    saldo = total_pago - total_obrigacoes
    return ResultadoSaldo(saldo=saldo, devedor=saldo < -TOLERANCIA_DEVEDOR)


def calcular_saldo(
    aluno: Union[Aluno, Mapping],
    configuracoes: Union[ConfiguracoesFinanceiras, Mapping, None],
    anos_letivos: Optional[Iterable[Union[AnoLetivo, Mapping]]],
    data_referencia: Optional[Union[date, datetime]] = None,
) -> ResultadoSaldo:
    """
    Calcula o saldo financeiro do aluno no ano letivo ativo.

    Args:
        aluno: Snapshot do aluno (modelo ou dict no formato do store).
        configuracoes: Configurações financeiras da escola. Sem elas, saldo neutro.
        anos_letivos: Anos letivos cadastrados. Lista vazia, saldo neutro.
        data_referencia: "Hoje" para o cálculo. Padrão: data atual no fuso da escola.

    Returns:
        ResultadoSaldo: `saldo` (pago - devido) e `devedor` (saldo abaixo da tolerância).
        Nunca levanta exceção; em caso de inconsistência retorna saldo 0, não devedor.
    """
    if configuracoes is None or not anos_letivos:
        return ResultadoSaldo()

    try:
        if data_referencia is None:
            data_referencia = data_de_hoje()
        elif isinstance(data_referencia, datetime):
            data_referencia = data_referencia.date()

        aluno = _como_modelo(Aluno, aluno)
        configuracoes = _como_modelo(ConfiguracoesFinanceiras, configuracoes)
        ano_ativo = obter_ano_ativo(_como_modelo(AnoLetivo, a) for a in anos_letivos)
        if ano_ativo is None:
            return ResultadoSaldo()

        return _calcular(aluno, configuracoes, ano_ativo, data_referencia)

    except Exception as e:
        identificador = aluno.get('id') if isinstance(aluno, Mapping) else getattr(aluno, 'id', None)
        logger.error(f"Erro ao calcular saldo do aluno {identificador}: {e}", exc_info=True)
        return ResultadoSaldo()
