"""Order confirmation template — carries the one-time code that verifies the email."""


class OtpConfirmationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        otp = context["otp"]
        ttl_minutes = context.get("ttl_minutes", 15)
        return {
            "subject": "Order Confirmation and OTP",
            "body": f"Thank you for your order! Your OTP is {otp}. It expires in {ttl_minutes} minutes.",
        }
