"""
Módulo Financeiro

Modelos de snapshot, motor de saldo e camada de serviço.
"""
