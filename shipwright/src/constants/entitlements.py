APPLE_SIGN_IN_KEY = "com.apple.developer.applesignin"
CONTACTS_NOTES_KEY = "com.apple.developer.contacts.notes"
ASSOCIATED_DOMAINS_KEY = "com.apple.developer.associated-domains"

CODE_SIGN_ENTITLEMENTS = "CODE_SIGN_ENTITLEMENTS"

ENTITLEMENTS_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
</dict>
</plist>
"""
