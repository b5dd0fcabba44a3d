"""Product status template — sent to the seller when a product is moderated."""


class ProductStatusTemplate:
    notification_type = "ProductStatusChanged"

    @staticmethod
    def render(context: dict) -> dict:
        status = context.get("status", "")
        product_name = context.get("product_name", "your product")
        message = context.get("message")

        lines = [f'Your product "{product_name}" is now {status}.']
        if message:
            lines.append(f"Note: {message}")
        lines.append("Bhutan Fresh Market")

        return {
            "subject": f"Product {status.capitalize()}: {product_name}",
            "body": "\n\n".join(lines),
        }
