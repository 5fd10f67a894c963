"""Services: REST client, payload models, money helpers and notifications."""
