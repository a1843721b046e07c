"""User-facing copy for the order modal."""

from __future__ import annotations

SUMMARY_QUANTITY = "Отлично! Вы выбираете {quantity} ⭐ за {price} сум."
SUMMARY_LABEL = "Отлично! Вы выбираете {label} за {price} сум."
DEFAULT_ITEM_LABEL = "товар"
AMOUNT = "{price} сум"

SENDER_UNKNOWN = "Не удалось получить ваш Telegram. Откройте WebApp через бота."
ATTACHMENT_REQUIRED = "Загрузите скриншот."

ORDER_ACCEPTED = "✅ Заказ принят! Вскоре свяжемся."
ORDER_FAILED = "❌ Не удалось отправить заказ. Попробуйте позже."
