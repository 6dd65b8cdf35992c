"""User-visible strings, keyed by language."""

from typing import Dict, Optional

MESSAGES: Dict[str, Dict[str, str]] = {
    "ja": {
        "pong": "Pong!\n{latency}",
        "close_outside_ticket": "このコマンドはチケットチャンネルでのみ使用できます。",
        "close_owner_unknown": "このチケットの問い合わせ者を特定できません。トピックを確認してください。",
        "close_notice_title": "問い合わせ",
        "close_notice_body": (
            "問い合わせを運営が終了しました\n"
            "まだ問題解決していない場合はお手数ですが、再度お問い合わせをお願いします。"
        ),
        "close_done": "お問い合わせを閉じました。",
        "staff_only": "このコマンドは運営のみ使用できます。",
        "kick_done": "✅ <@{user_id}> をキックしました。",
        "ban_done": "✅ <@{user_id}> をBANしました。",
        "missing_target": "対象のユーザーを指定してください。",
        "action_failed": "⚠️ 処理に失敗しました: {error}",
        "more_attachments": "添付ファイル:",
    },
    "en": {
        "pong": "Pong!\n{latency}",
        "close_outside_ticket": "This command can only be used in a ticket channel.",
        "close_owner_unknown": "Could not tell who opened this ticket. Check the channel topic.",
        "close_notice_title": "Inquiry",
        "close_notice_body": (
            "Staff have closed your inquiry.\n"
            "If your issue is not resolved yet, please message us again."
        ),
        "close_done": "Closed the inquiry.",
        "staff_only": "Only staff can use this command.",
        "kick_done": "✅ Kicked <@{user_id}>.",
        "ban_done": "✅ Banned <@{user_id}>.",
        "missing_target": "Specify the user to act on.",
        "action_failed": "⚠️ Action failed: {error}",
        "more_attachments": "Attachments:",
    },
}


def language_of(locale: Optional[str], default: str = "ja") -> str:
    """Map a Discord locale (``ja``, ``en-US``, ...) to a catalogue language."""
    if locale:
        lang = str(locale).split("-")[0].lower()
        if lang in MESSAGES:
            return lang
    return default if default in MESSAGES else "ja"


def text(key: str, locale: Optional[str] = None, default: str = "ja", **kwargs) -> str:
    template = MESSAGES[language_of(locale, default)][key]
    return template.format(**kwargs) if kwargs else template
