from datetime import date

import pytest

from seismart.financeiro.modelos import Aluno, AnoLetivo, ConfiguracoesFinanceiras


@pytest.fixture
def configuracoes():
    """Escola padrão dos testes: sem multa, limite no dia 10."""
    return ConfiguracoesFinanceiras(
        mensalidade=1000,
        taxa_matricula=2000,
        taxa_renovacao=1500,
        dia_limite_pagamento=10,
        multa_atraso_percentual=0,
    )


@pytest.fixture
def configuracoes_com_multa(configuracoes):
    return configuracoes.model_copy(update={'multa_atraso_percentual': 10})


@pytest.fixture
def anos_letivos():
    return [
        AnoLetivo(ano=2023, status='Concluído', mes_inicio=2, mes_fim=11),
        AnoLetivo(ano=2024, status='Em Curso', mes_inicio=2, mes_fim=11),
    ]


@pytest.fixture
def novo_aluno():
    """Fábrica de alunos: matriculado em 2023 (paga renovação em 2024) por padrão."""
    def _criar(**campos):
        dados = {
            'id': 'S001',
            'nome': 'Ana Macuácua',
            'data_matricula': date(2023, 3, 1),
            'classe_pretendida': '7ª Classe',
        }
        dados.update(campos)
        return Aluno(**dados)
    return _criar
