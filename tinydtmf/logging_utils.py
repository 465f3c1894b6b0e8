"""
Módulo centralizado de logging com Rich para TinyDTMF
"""

import logging

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

# Console global compartilhado (stderr, stdout fica livre para dados)
console = Console(stderr=True)


class RichConsoleHandler(logging.Handler):
    """Handler personalizado que usa Rich console diretamente"""

    def __init__(self, console: Console | None = None):
        super().__init__()
        self.console = console or Console(stderr=True)

    def emit(self, record):
        """Emitir log usando Rich console"""
        try:
            # Se a mensagem é um objeto Rich, renderizar diretamente
            if isinstance(record.msg, Panel | Text):
                self.console.print(record.msg)
            else:
                self.console.print(record.getMessage(), markup=False)
        except Exception:
            self.handleError(record)


class RichDTMFLogger:
    """Logger personalizado com Rich para reprodução e transcodificação DTMF"""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)

    def log_symbol(self, symbol: str, n_samples: int):
        """Log de símbolo enviado ao sink"""
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        text = Text()
        text.append("🎵 ", style="bold cyan")
        text.append("SPACE" if symbol == " " else symbol, style="bold blue")
        text.append(f" ({n_samples} samples)", style="dim")
        self.logger.debug(text)

    def log_transcode(self, mode: str, source: str, target: str, count: int):
        """Log de conversão de arquivo"""
        text = Text()
        text.append("🔄 ", style="bold cyan")
        text.append(f"{mode.upper()}: ", style="bold")
        text.append(source, style="bold blue")
        text.append(f" → {target} ({count} bytes)", style="dim")
        self.logger.info(text)

    def log_error(self, error: Exception, context: str | None = None):
        """Log de erro com panel"""
        title = "❌ ERROR"
        if context:
            title += f" in {context}"

        error_text = f"{type(error).__name__}: {str(error)}"
        panel = Panel(
            Text(error_text), title=title, title_align="left", border_style="red", expand=False
        )
        self.logger.error(panel)

    def log_success(self, message: str):
        """Log de sucesso"""
        text = Text()
        text.append("✅ ", style="bold green")
        text.append(message, style="green")
        self.logger.info(text)


# Função para configurar logging global
def setup_logging(level: str = "WARNING") -> None:
    """Configura o sistema de logging global para TinyDTMF"""
    # Limpar handlers existentes para evitar duplicação
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    FORMAT = "%(message)s"
    logging.basicConfig(
        level=level.upper(),
        format=FORMAT,
        datefmt="[%X]",
        handlers=[RichConsoleHandler(console)],
        force=True,  # Força reconfiguração
    )

