"""
Templates de email - centralizados.

Cada template tem:
- subject: assunto com placeholder
- body: HTML com placeholder
- text: versão texto simples

Placeholders no formato {nome} para str.format(). Os valores são
escapados para HTML antes de entrar no corpo HTML.
"""

import html
from typing import Any, Dict, Tuple

_BASE_STYLE = "font-family: Arial, sans-serif; padding: 20px; max-width: 600px;"
_LABEL_STYLE = "padding: 8px; border-bottom: 1px solid #ddd; font-weight: bold;"
_VALUE_STYLE = "padding: 8px; border-bottom: 1px solid #ddd;"
_FOOTER_STYLE = (
    "color: #777; font-size: 12px; margin-top: 30px; "
    "border-top: 1px solid #eee; padding-top: 10px;"
)

TEMPLATES = {
    'novo_pedido': {
        'subject': 'Novo Pedido Gerado - {codigo} - {data}',
        'body': f'''
        <div style="{_BASE_STYLE}">
            <h2 style="color: #333;">Novo Pedido Gerado</h2>
            <p>Um novo pedido foi gerado no sistema.</p>
            <table style="width: 100%; border-collapse: collapse; margin: 20px 0;">
                <tr>
                    <td style="{_LABEL_STYLE}">Número do Pedido:</td>
                    <td style="{_VALUE_STYLE}">{{codigo}}</td>
                </tr>
                <tr>
                    <td style="{_LABEL_STYLE}">Data:</td>
                    <td style="{_VALUE_STYLE}">{{data}}</td>
                </tr>
                <tr>
                    <td style="{_LABEL_STYLE}">Solicitante:</td>
                    <td style="{_VALUE_STYLE}">{{solicitante}}</td>
                </tr>
                <tr>
                    <td style="{_LABEL_STYLE}">Total de Itens:</td>
                    <td style="{_VALUE_STYLE}">{{total_itens}}</td>
                </tr>
                <tr>
                    <td style="{_LABEL_STYLE}">Observações:</td>
                    <td style="{_VALUE_STYLE}">{{observacoes}}</td>
                </tr>
            </table>
            <p>A planilha de requisição está anexada a este email.</p>
            <p style="{_FOOTER_STYLE}">
                Este é um email automático, por favor não responda.
            </p>
        </div>
        ''',
        'text': (
            "Olá,\n\n"
            "Um novo pedido foi gerado no sistema.\n\n"
            "Número do Pedido: {codigo}\n"
            "Data: {data}\n"
            "Solicitante: {solicitante}\n"
            "Total de Itens: {total_itens}\n\n"
            "Observações: {observacoes}\n\n"
            "A planilha de requisição está anexada a este email.\n\n"
            "Este é um email automático, por favor não responda.\n"
        ),
    },
}


def render_template(template_name: str, context: Dict[str, Any]) -> Tuple[str, str, str]:
    """
    Renderiza um template.

    Args:
        template_name: Nome do template
        context: Valores dos placeholders

    Returns:
        Tupla (subject, body_html, body_text)

    Raises:
        KeyError: template inexistente
    """
    template = TEMPLATES[template_name]
    escaped = {k: html.escape(str(v)) for k, v in context.items()}
    return (
        template['subject'].format(**context),
        template['body'].format(**escaped),
        template['text'].format(**context),
    )
