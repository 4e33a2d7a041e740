"""
Test Twilio SMS Integration

Run this script to verify Twilio is configured correctly
and can send a guest list verification SMS.

Usage: python scripts/test_twilio.py
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from app.core.config import settings
from app.services.twilio_service import TwilioService, env_credentials
from app.services.verification_code import generate_verification_code
from utils.sms_utils import build_verification_sms
from utils.validation_utils import normalize_phone_number


def test_twilio_config():
    """Test if Twilio is properly configured"""
    print("=" * 60)
    print("  Twilio Configuration Test")
    print("=" * 60 + "\n")

    credentials = env_credentials()
    print(f"Account SID: {credentials.account_sid[:10]}..." if credentials.account_sid else "Account SID: ❌ Not set")
    print(f"Auth Token: {'✅ Set' if credentials.auth_token else '❌ Not set'}")
    print(f"From Number: {credentials.from_phone or '❌ Not set'}")
    print(f"\nConfiguration valid: {'✅ Yes' if credentials.is_configured() else '❌ No'}\n")

    if not credentials.is_configured():
        print("⚠️  Set TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN and TWILIO_FROM_PHONE in .env")
        print("   (or save them in Admin Settings, which take priority at runtime)")
        return False

    return True


async def test_send_message():
    """Send a sample verification code"""
    print("=" * 60)
    print("  Test Message Sending")
    print("=" * 60 + "\n")

    phone = normalize_phone_number(input("Enter a US phone number (e.g. 555-123-4567): "))
    if not phone:
        print("❌ Please enter a valid 10-digit phone number")
        return

    code = generate_verification_code()
    print(f"\n📤 Sending code {code} to {phone}...")

    twilio = TwilioService(base_url=settings.TWILIO_API_BASE_URL)
    result = await twilio.send_sms(env_credentials(), phone, build_verification_sms("Test Event", code))

    if result["success"]:
        print(f"\n✅ Message sent successfully!")
        print(f"Message SID: {result.get('message_sid')}")
        print(f"Status: {result.get('status')}")
    else:
        print(f"\n❌ Failed to send message")
        print(f"Error: {result.get('error')}")


async def main():
    """Run all tests"""
    print("\n🧪 NightList Twilio Integration Test\n")

    if not test_twilio_config():
        print("\n❌ Configuration test failed. Please fix .env file and try again.")
        return

    test_send = input("Do you want to send a test message? (y/n): ")
    if test_send.lower() == 'y':
        await test_send_message()
    else:
        print("\n✅ Configuration test passed!")

    print("\n" + "=" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(main())
