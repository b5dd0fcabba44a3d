"""Shop status template — sent to a shop owner when an admin moderates the shop."""

_TITLES = {
    "active": "Shop Approved",
    "rejected": "Shop Rejected",
}


class ShopStatusTemplate:
    notification_type = "ShopStatusChanged"

    @staticmethod
    def render(context: dict) -> dict:
        status = context.get("status", "")
        shop_name = context.get("shop_name", "your shop")
        owner_name = context.get("owner_name") or "there"
        message = context.get("message") or f"Shop {status} by admin"

        if status == "active":
            summary = f'Good news! Your shop "{shop_name}" has been approved and is now visible to buyers.'
        elif status == "rejected":
            summary = f'Your shop "{shop_name}" was not approved.'
        else:
            summary = f'The status of your shop "{shop_name}" is now "{status}".'

        return {
            "subject": _TITLES.get(status, "Shop Status Updated"),
            "body": (
                f"Hi {owner_name},\n\n"
                f"{summary}\n\n"
                f"Message from the admin team: {message}\n\n"
                "Bhutan Fresh Market"
            ),
        }
