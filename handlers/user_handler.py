"""
handlers/user_handler.py
------------------------
Handles /start, /ajuda (/help) and /config.
Registers the user and stores preferences through UserService.
"""

from dispatch.command_router import parse_distances
from models.callbacks import UserConfigCallback
from models.command import Button, CommandInput, CommandOutput, Keyboard
from services.user_service import UserNotFoundError, UserService
from utils.logger import get_logger

logger = get_logger(__name__)
user_service = UserService()

DEFAULT_NAME = "Corredor"

HELP_TEXT = (
    "🏃‍♂️ <b>GUIA COMPLETO DO DASHBOT</b> 🏃‍♀️\n"
    "🔍 <b>DESCOBRIR CORRIDAS</b>\n"
    "┣ 🏃‍♂️ <code>/corridas</code> - Todas as corridas disponíveis\n"
    "┣ 🎯 <code>/corridas 5km,10km</code> - Filtre por distâncias\n"
    "┣ ⏰ <code>/proxima_corrida</code> - Próxima corrida chegando\n"
    "┣ 🔎 <code>/buscar_corridas</code> - Busque por faixa de distância\n"
    "┣ ⭐ <code>/favoritos</code> - Suas corridas favoritas\n"
    "┗ 🔥 <i>Encontre a corrida perfeita para você!</i>\n\n"
    "⚙️ <b>PERSONALIZAÇÃO</b>\n"
    "┣ 📏 <code>/config distancias 5,10,21</code> - Suas distâncias favoritas\n"
    "┣ 🔔 <code>/config notificacoes on/off</code> - Ativar/desativar alertas\n"
    "┣ 📅 <code>/config lembrete 3</code> - Dias de antecedência para lembretes\n"
    "┗ 💡 <i>Configure para receber recomendações personalizadas!</i>\n\n"
    "🚀 <b>OUTRAS FUNÇÕES</b>\n"
    "┣ 🏠 <code>/start</code> - Apresentação e boas-vindas\n"
    "┗ ❓ <code>/ajuda</code> ou <code>/help</code> - Este guia completo\n\n"
    "🔥 <i>Bora correr? Escolha seu comando e vamos nessa!</i> 🔥"
)

CONFIG_TEXT = (
    "⚙️ <b>Configurações do DashBot</b>\n\n"
    "<b>Comandos disponíveis:</b>\n"
    "📏 <code>/config distancias 5,10,21</code> - Definir distâncias favoritas\n"
    "🔔 <code>/config notificacoes on/off</code> - Ativar/desativar alertas\n"
    "📅 <code>/config lembrete 3</code> - Dias de antecedência para lembretes\n\n"
    "<i>💡 Configure suas preferências para receber recomendações personalizadas!</i>"
)

NOT_REGISTERED_TEXT = "❌ Usuário não encontrado. Use /start para se cadastrar."


def _welcome_text(name: str) -> str:
    return (
        f"🏃‍♂️ <b>Bem-vindo ao DashBot, {name}!</b> 🏃‍♀️\n\n"
        "🎯 <b>Seu assistente pessoal para corridas de rua!</b>\n\n"
        "Aqui você encontra as melhores corridas, organiza suas preferências "
        "e nunca mais perde uma inscrição! 🏆\n\n"
        "<b>🚀 Comandos principais:</b>\n"
        "🏃‍♂️ /corridas - Veja todas as corridas disponíveis\n"
        "🔍 /corridas 5km,10km - Filtre por distâncias\n"
        "⏰ /proxima_corrida - Próxima corrida chegando\n"
        "⚙️ /config - Configure suas preferências\n"
        "❓ /ajuda - Guia completo de comandos\n\n"
        "<i>💡 Dica: Configure suas distâncias favoritas com /config "
        "para receber recomendações personalizadas!</i>"
    )


async def start_command(command_input: CommandInput) -> CommandOutput:
    """Handle /start - register the user and show the welcome message."""
    user = command_input.user
    if user and user.id and user.name:
        try:
            user_service.register_user(str(user.id), user.name)
            logger.info(f"User {user.id} ({user.name}) started the bot.")
        except Exception as e:
            # The welcome is still shown if registration fails
            logger.error(f"Failed to register user {user.id}: {e}")

    name = (user.name if user else None) or DEFAULT_NAME
    return CommandOutput(text=_welcome_text(name), format="HTML")


async def help_command(command_input: CommandInput) -> CommandOutput:
    """Handle /ajuda and /help."""
    return CommandOutput(text=HELP_TEXT, format="HTML")


async def config_command(command_input: CommandInput) -> CommandOutput:
    """
    Handle /config.

    Usage:
        /config                        -> list options (with buttons)
        /config distancias 5,10,21
        /config notificacoes on|off
        /config lembrete <dias>
    """
    if not command_input.args:
        return CommandOutput(
            text=CONFIG_TEXT,
            format="HTML",
            keyboard=Keyboard(buttons=[
                [Button("📏 Distâncias", UserConfigCallback("distances"))],
                [
                    Button("🔔 Ativar alertas", UserConfigCallback("notifications", "on")),
                    Button("🔕 Desativar alertas", UserConfigCallback("notifications", "off")),
                ],
            ]),
        )

    setting = command_input.args[0].lower()
    value = " ".join(command_input.args[1:])
    telegram_id = command_input.user_id

    try:
        if setting == "distancias":
            distances = parse_distances(value.replace(" ", ","))
            if not distances:
                return CommandOutput(
                    text="❌ Distâncias inválidas. Use: /config distancias 5,10,21", format="HTML"
                )
            user_service.update_user_preferences(telegram_id, preferred_distances=distances)
            return CommandOutput(
                text=(
                    "✅ <b>Distâncias favoritas configuradas!</b>\n\n"
                    f"Você receberá recomendações para: {', '.join(map(str, distances))}km\n\n"
                    "💡 Use /corridas para ver corridas com suas distâncias favoritas."
                ),
                format="HTML",
            )

        if setting == "notificacoes":
            enabled = value.lower() == "on"
            user_service.update_user_preferences(telegram_id, notifications_enabled=enabled)
            if enabled:
                text = "✅ <b>Notificações ativadas!</b>\n\nVocê receberá alertas sobre novas corridas."
            else:
                text = "❌ <b>Notificações desativadas!</b>\n\nVocê não receberá mais alertas automáticos."
            return CommandOutput(text=text, format="HTML")

        if setting == "lembrete":
            try:
                days = int(value)
            except ValueError:
                return CommandOutput(
                    text="❌ Número de dias inválido. Use: /config lembrete 3", format="HTML"
                )
            user_service.update_user_preferences(telegram_id, reminder_days=days)
            return CommandOutput(
                text=(
                    "⏰ <b>Lembretes configurados!</b>\n\n"
                    f"Você receberá lembretes {days} dia(s) antes das corridas."
                ),
                format="HTML",
            )

    except UserNotFoundError:
        return CommandOutput(text=NOT_REGISTERED_TEXT, format="HTML")
    except Exception as e:
        logger.error(f"Failed to update config '{setting}' for user {telegram_id}: {e}")
        return CommandOutput(
            text="❌ Erro ao processar configuração. Tente novamente mais tarde.", format="HTML"
        )

    return CommandOutput(
        text="❌ Configuração não reconhecida. Use /config para ver as opções disponíveis.",
        format="HTML",
    )


def get_commands() -> dict:
    """Commands of the `user` module, keyed by name."""
    return {
        "start": start_command,
        "ajuda": help_command,
        "help": help_command,
        "config": config_command,
    }
