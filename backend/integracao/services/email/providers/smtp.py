"""
SMTP provider - envio via smtplib com STARTTLS.

Default Gmail: requer App Password
(https://myaccount.google.com/apppasswords).
"""

import smtplib
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import List, Optional

from .base import Anexo, BaseEmailProvider
from ..constants import SMTP_HOST_PADRAO, SMTP_PORT_PADRAO, SMTP_TIMEOUT


class SmtpProvider(BaseEmailProvider):
    """Provider SMTP (Gmail por padrão)"""

    def _validate_config(self) -> None:
        if not self.config.get('smtp_user') or not self.config.get('smtp_password'):
            raise ValueError(
                "Credenciais ausentes. Configurar SMTP_USER/SMTP_PASSWORD "
                "(ou GMAIL_USER/GMAIL_APP_PASSWORD) no arquivo .env"
            )

    def connect_smtp(self) -> smtplib.SMTP:
        """Conexão SMTP com TLS"""
        host = self.config.get('smtp_host') or SMTP_HOST_PADRAO
        port = int(self.config.get('smtp_port') or SMTP_PORT_PADRAO)
        timeout = int(self.config.get('smtp_timeout') or SMTP_TIMEOUT)

        server = smtplib.SMTP(host, port, timeout=timeout)
        if self.config.get('smtp_use_tls', True):
            server.starttls()

        server.login(self.config['smtp_user'], self.config['smtp_password'])
        return server

    def build_message(self, to: List[str], subject: str, body_html: str,
                      body_text: Optional[str] = None,
                      attachments: Optional[List[Anexo]] = None) -> MIMEMultipart:
        msg = MIMEMultipart('mixed')
        msg['Subject'] = subject
        msg['From'] = formataddr((
            self.config.get('smtp_sender_name', 'Sistema de Pedidos'),
            self.config['smtp_user']
        ))
        msg['To'] = ', '.join(to)
        msg['Message-ID'] = make_msgid()

        corpo = MIMEMultipart('alternative')
        if body_text:
            corpo.attach(MIMEText(body_text, 'plain', 'utf-8'))
        corpo.attach(MIMEText(body_html, 'html', 'utf-8'))
        msg.attach(corpo)

        for anexo in attachments or []:
            maintype, _, subtype = anexo.mime_type.partition('/')
            part = MIMEApplication(anexo.content, _subtype=subtype or 'octet-stream')
            part.add_header('Content-Disposition', 'attachment', filename=anexo.filename)
            msg.attach(part)

        return msg

    def send_email(self, to: List[str], subject: str, body_html: str,
                   body_text: Optional[str] = None,
                   attachments: Optional[List[Anexo]] = None) -> str:
        """Envia via SMTP e retorna o Message-ID"""
        msg = self.build_message(to, subject, body_html, body_text, attachments)

        server = self.connect_smtp()
        try:
            server.send_message(msg)
        finally:
            try:
                server.quit()
            except smtplib.SMTPException:
                pass

        return msg['Message-ID']
