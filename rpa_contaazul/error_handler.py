# -*- coding: utf-8 -*-
"""
Módulo de Tratamento de Erros (rpa_contaazul/error_handler.py).

Responsabilidade:
1. Definir a hierarquia de exceções personalizadas do robô.
2. Permitir que o orquestrador distinga falhas de configuração, de conexão,
   de navegação e de elementos ausentes na tela.
"""


class RPAError(Exception):
    """
    Classe base para todas as exceções do Robô ContaAzul.
    Captura a mensagem e, opcionalmente, a exceção original (chaining).
    """

    def __init__(self, message, original_exception=None):
        super().__init__(message)
        self.original_exception = original_exception


class ConfigurationError(RPAError):
    """
    Levantado quando não há nenhuma forma utilizável de obter um navegador:
    nenhum endpoint de depuração remota respondeu e CHROME_EXECUTABLE_PATH não foi definido.
    Ação recomendada: Corrigir o .env ou iniciar o Chrome com --remote-debugging-port.
    """

    pass


class BrowserConnectionError(RPAError):
    """
    Levantado quando a conexão a um endpoint de depuração remota falha.
    Tratado internamente: o robô passa para o próximo endpoint da lista.
    """

    pass


class AuthenticationTimeoutError(RPAError):
    """
    O marcador de tela autenticada não apareceu após o login automático.
    Nunca chega ao chamador: o fluxo cai para a espera pelo login manual.
    """

    pass


class LoginWaitCancelledError(RPAError):
    """
    A espera pelo login manual foi cancelada pelo aplicativo hospedeiro.
    """

    pass


class NavigationError(RPAError):
    """
    Levantado quando uma navegação (goto) falha ou estoura o tempo.
    Ação recomendada: Registrar e seguir pelo caminho alternativo (não é fatal).
    """

    pass


class ElementNotFoundError(RPAError):
    """
    Levantado quando um elemento esperado não existe na tela.
    Ex: campo de busca de OS ou botão de pesquisa ausentes.
    """

    pass
