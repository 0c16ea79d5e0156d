"""
Módulo Principal do Motor Financeiro (SEI Smart)

Reexporta a API pública: o cálculo de saldo por aluno e os serviços que o
consomem (listagem, trancamento de matrícula e resumo de inadimplência).
"""

from .financeiro.modelos import (
    Aluno,
    AnoLetivo,
    CobrancaExtra,
    ConfiguracoesFinanceiras,
    PerfilFinanceiro,
    PropinaPorClasse,
    RegistoPagamento,
    ResultadoSaldo,
)
from .financeiro.saldo import calcular_saldo, resolver_propinas
from .financeiro.services import (
    MatriculaBloqueadaError,
    ResumoInadimplencia,
    filtrar_alunos,
    filtrar_por_situacao_financeira,
    resumo_inadimplencia,
    trancar_matricula,
)
