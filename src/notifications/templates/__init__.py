"""Template registry: maps a notification kind to its template class."""

from notifications.templates.product_status import ProductStatusTemplate
from notifications.templates.shop_status import ShopStatusTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    ShopStatusTemplate.notification_type: ShopStatusTemplate,
    ProductStatusTemplate.notification_type: ProductStatusTemplate,
}


def get_template(notification_type: str):
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
