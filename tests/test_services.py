import unittest
from datetime import date
from unittest.mock import patch

from seismart.financeiro.modelos import (
    Aluno,
    AnoLetivo,
    ConfiguracoesFinanceiras,
    RegistoPagamento,
    ResultadoSaldo,
)
from seismart.financeiro.services import (
    MatriculaBloqueadaError,
    filtrar_alunos,
    filtrar_por_situacao_financeira,
    resumo_inadimplencia,
    trancar_matricula,
)

REFERENCIA = date(2024, 5, 1)


class BaseServicos(unittest.TestCase):

    def setUp(self):
        self.configuracoes = ConfiguracoesFinanceiras(
            mensalidade=1000, taxa_matricula=2000, taxa_renovacao=1500, moeda='MZN'
        )
        self.anos = [AnoLetivo(ano=2024, status='Em Curso', mes_inicio=2, mes_fim=11)]

        # Devedor: renovação 1500 + 4 mensalidades, nada pago
        self.devedor = Aluno(id='S001', nome='Ana Macuácua', data_matricula=date(2023, 3, 1),
                             classe_pretendida='7ª Classe')
        # Em dia: pagou exatamente o devido
        self.em_dia = Aluno(id='S002', nome='Bruno Cossa', data_matricula=date(2023, 3, 1),
                            classe_pretendida='8ª Classe',
                            pagamentos=[RegistoPagamento(ano_letivo=2024, valor=5500)])
        # Credor: pagou adiantado
        self.credor = Aluno(id='S003', nome='Celia Mondlane', data_matricula=date(2023, 3, 1),
                            classe_pretendida='7ª Classe', status='Transferido',
                            pagamentos=[RegistoPagamento(ano_letivo=2024, valor=9000)])
        self.alunos = [self.devedor, self.em_dia, self.credor]


class TestFiltroFinanceiro(BaseServicos):

    def test_filtro_devedores(self):
        resultado = filtrar_por_situacao_financeira(
            self.alunos, 'Devedores (Saldo Negativo)', self.configuracoes, self.anos, REFERENCIA
        )
        self.assertEqual([a.id for a in resultado], ['S001'])

    def test_filtro_em_dia(self):
        resultado = filtrar_por_situacao_financeira(
            self.alunos, 'Em Dia / Credores', self.configuracoes, self.anos, REFERENCIA
        )
        self.assertEqual([a.id for a in resultado], ['S002', 'S003'])

    def test_filtro_todos_nao_calcula_saldo(self):
        with patch('seismart.financeiro.services.calcular_saldo') as mock_calculo:
            resultado = filtrar_por_situacao_financeira(self.alunos, 'Todos', self.configuracoes, self.anos)
        self.assertEqual(len(resultado), 3)
        mock_calculo.assert_not_called()

    def test_sem_configuracoes_filtro_e_ignorado(self):
        resultado = filtrar_por_situacao_financeira(self.alunos, 'Devedores (Saldo Negativo)', None, self.anos)
        self.assertEqual(len(resultado), 3)

    def test_filtro_desconhecido(self):
        with self.assertRaises(ValueError):
            filtrar_por_situacao_financeira(self.alunos, 'Caloteiros', self.configuracoes, self.anos)


class TestFiltrarAlunos(BaseServicos):

    def test_busca_por_nome_sem_diferenciar_maiusculas(self):
        resultado = filtrar_alunos(self.alunos, termo='BRUNO')
        self.assertEqual([a.id for a in resultado], ['S002'])

    def test_busca_por_classe_e_id(self):
        self.assertEqual(len(filtrar_alunos(self.alunos, termo='7ª')), 2)
        self.assertEqual([a.id for a in filtrar_alunos(self.alunos, termo='s003')], ['S003'])

    def test_filtros_combinados(self):
        resultado = filtrar_alunos(
            self.alunos, termo='7ª', status='Ativo', filtro_financeiro='Devedores (Saldo Negativo)',
            configuracoes=self.configuracoes, anos_letivos=self.anos, data_referencia=REFERENCIA,
        )
        self.assertEqual([a.id for a in resultado], ['S001'])

    def test_filtro_por_status(self):
        resultado = filtrar_alunos(self.alunos, status='Transferido')
        self.assertEqual([a.id for a in resultado], ['S003'])


class TestTrancarMatricula(BaseServicos):

    def test_devedor_e_bloqueado(self):
        with self.assertRaises(MatriculaBloqueadaError) as ctx:
            trancar_matricula(self.devedor, self.configuracoes, self.anos, REFERENCIA)

        self.assertEqual(ctx.exception.divida, 5500)
        self.assertEqual(ctx.exception.moeda, 'MZN')
        self.assertIn('BLOQUEADO', str(ctx.exception))
        self.assertIn('5,500.00 MZN', str(ctx.exception))

    def test_aluno_em_dia_e_suspenso(self):
        suspenso = trancar_matricula(self.em_dia, self.configuracoes, self.anos, REFERENCIA)

        self.assertEqual(suspenso.status, 'Suspenso')
        self.assertEqual(suspenso.data_suspensao, REFERENCIA)
        # O snapshot original não é alterado
        self.assertEqual(self.em_dia.status, 'Ativo')
        self.assertIsNone(self.em_dia.data_suspensao)

    def test_anos_letivos_em_gerador(self):
        with self.assertRaises(MatriculaBloqueadaError):
            trancar_matricula(self.devedor, self.configuracoes, (a for a in self.anos), REFERENCIA)

    def test_ja_suspenso(self):
        suspenso = self.em_dia.model_copy(update={'status': 'Suspenso'})
        with self.assertRaises(ValueError):
            trancar_matricula(suspenso, self.configuracoes, self.anos, REFERENCIA)

    @patch('seismart.financeiro.services.data_de_hoje', return_value=date(2024, 7, 3))
    @patch('seismart.financeiro.services.calcular_saldo', return_value=ResultadoSaldo(saldo=-10, devedor=False))
    def test_data_padrao_e_hoje(self, mock_calculo, mock_hoje):
        suspenso = trancar_matricula(self.devedor, self.configuracoes, self.anos)

        self.assertEqual(suspenso.data_suspensao, date(2024, 7, 3))
        mock_calculo.assert_called_once_with(self.devedor, self.configuracoes, self.anos, date(2024, 7, 3))

    def test_suspensao_interrompe_cobranca_futura(self):
        suspenso = trancar_matricula(self.em_dia, self.configuracoes, self.anos, REFERENCIA)
        resultado = filtrar_por_situacao_financeira(
            [suspenso], 'Em Dia / Credores', self.configuracoes, self.anos, date(2024, 9, 1)
        )
        self.assertEqual(len(resultado), 1)


class TestResumoInadimplencia(BaseServicos):

    def test_resumo(self):
        resumo = resumo_inadimplencia(self.alunos, self.configuracoes, self.anos, REFERENCIA)

        self.assertEqual(resumo.total_alunos, 3)
        self.assertEqual(resumo.total_devedores, 1)
        self.assertEqual(resumo.divida_total, 5500)
        self.assertEqual(resumo.moeda, 'MZN')

    def test_resumo_com_configuracoes_em_json(self):
        configuracoes = {'monthlyFee': 1000, 'enrollmentFee': 2000, 'renewalFee': 1500, 'currency': 'AOA'}
        resumo = resumo_inadimplencia(self.alunos, configuracoes, self.anos, REFERENCIA)
        self.assertEqual(resumo.total_devedores, 1)
        self.assertEqual(resumo.moeda, 'AOA')

    def test_anos_letivos_em_gerador_valem_para_todos_os_alunos(self):
        devedores = [self.devedor, self.devedor.model_copy(update={'id': 'S004'}),
                     self.devedor.model_copy(update={'id': 'S005'})]

        resumo = resumo_inadimplencia(devedores, self.configuracoes, (a for a in self.anos), REFERENCIA)
        filtrados = filtrar_por_situacao_financeira(
            devedores, 'Devedores (Saldo Negativo)', self.configuracoes, (a for a in self.anos), REFERENCIA
        )

        self.assertEqual(resumo.total_devedores, 3)
        self.assertEqual(resumo.divida_total, 3 * 5500)
        self.assertEqual(len(filtrados), 3)

    def test_resumo_vazio(self):
        resumo = resumo_inadimplencia([], self.configuracoes, self.anos, REFERENCIA)
        self.assertEqual(resumo, (0, 0, 0.0, 'MZN'))


if __name__ == '__main__':
    unittest.main()
