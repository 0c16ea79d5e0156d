"""
Constantes Globais do Motor Financeiro.
Fonte Única da Verdade (Single Source of Truth) para os valores de domínio.
"""

# === STATUS DO ALUNO ===
STATUS_ATIVO = 'Ativo'
STATUS_INATIVO = 'Inativo'
STATUS_TRANSFERIDO = 'Transferido'
STATUS_SUSPENSO = 'Suspenso'

STATUS_ALUNO = (STATUS_ATIVO, STATUS_INATIVO, STATUS_TRANSFERIDO, STATUS_SUSPENSO)

# === PERFIL FINANCEIRO ===
PERFIL_NORMAL = 'Normal'
PERFIL_ISENTO_TOTAL = 'Isento Total'
PERFIL_SEM_MULTA = 'Sem Multa'
PERFIL_DESCONTO_PARCIAL = 'Desconto Parcial'

# === ANO LETIVO ===
ANO_PLANEADO = 'Planeado'
ANO_EM_CURSO = 'Em Curso'
ANO_CONCLUIDO = 'Concluído'

# === TIPOS DE PAGAMENTO ===
TIPO_MATRICULA = 'Matrícula'
TIPO_RENOVACAO = 'Renovação'
TIPO_MENSALIDADE = 'Mensalidade'

TIPOS_PAGAMENTO = (
    TIPO_MATRICULA,
    TIPO_RENOVACAO,
    TIPO_MENSALIDADE,
    'Uniforme',
    'Material',
    'Taxa de Exames',
    'Taxa de Transferência',
    'Multa/Danos',
    'Outros',
)

# === FILTROS DA LISTAGEM ===
FILTRO_TODOS = 'Todos'
FILTRO_DEVEDORES = 'Devedores (Saldo Negativo)'
FILTRO_EM_DIA = 'Em Dia / Credores'

FILTROS_FINANCEIROS = (FILTRO_TODOS, FILTRO_DEVEDORES, FILTRO_EM_DIA)

# === VALORES PADRÃO ===
MES_INICIO_PADRAO = 2
MES_FIM_PADRAO = 11
DIA_LIMITE_PADRAO = 10
MOEDA_PADRAO = 'MZN'

# Tolerância absoluta (na moeda da escola) antes de marcar um aluno como devedor
TOLERANCIA_DEVEDOR = 50
