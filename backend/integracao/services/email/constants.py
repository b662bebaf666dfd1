"""
Constantes do sistema de email.
"""

# Defaults Gmail (STARTTLS)
SMTP_HOST_PADRAO = 'smtp.gmail.com'
SMTP_PORT_PADRAO = 587

# Timeout conexão
SMTP_TIMEOUT = 30  # segundos


XLSX_MIME_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
