"""Default system prompt for the relay."""

# Summary of the Webflow Data API v2 the assistant is expected to discuss.
WEBFLOW_API_SUMMARY = """\
Core Functionality
Purpose: Interact programmatically with Webflow site data via a RESTful API (v2).
Key Capabilities:
CMS Management: Create, read, update, delete, publish, and unpublish Collections and Items. This is a primary function.
Site Management: Retrieve site details (info, domains, locales), list accessible sites, and publish sites.
Form Data: Access submissions from native Webflow forms.
Webhooks: Manage webhook subscriptions to receive real-time event notifications (e.g., form submission, site publish, CMS changes).
Other: Manage Assets (upload/list), Custom Code, User Accounts (Memberships), and Ecommerce data (Products, Orders, Inventory).

Authentication
Method: Requires an Authorization: Bearer <TOKEN> header in all requests.
Token Types: Use either an OAuth 2.0 access_token (obtained via Authorization Code flow, standard for apps) or a Site API Token (generated in site settings, for single-site integrations).
Permissions: Actions are limited by the scopes granted to the token (e.g., cms:read, cms:write, sites:read, sites:write, cms:publish). Ensure the token has the necessary scopes for the intended operation.

Key Interaction Patterns
Protocol: REST API using standard HTTP methods (GET, POST, PATCH, DELETE) and JSON for request/response bodies.
Endpoints: Follow predictable patterns (e.g., /v2/sites, /v2/sites/{site_id}/collections, /v2/collections/{collection_id}/items, /v2/collections/{collection_id}/items/{item_id}). Use API version /v2/.
CMS Workflow: Managing CMS items involves understanding staged vs. live states. Use isDraft flag, live parameter (in POST/PATCH requests), and specific publish/unpublish endpoints (POST.../publish, DELETE.../live) to control content visibility.

Data Structures
Format: All data is exchanged as JSON objects.
Key Objects: Understand the structure of Site, Collection, and Item objects.
Dynamic Content (fieldData): Item objects contain a fieldData object holding the actual content. Crucially, the structure of fieldData varies depending on the specific Collection's schema. Before creating or updating an Item, you may need to first fetch the Collection's schema (GET /v2/collections/{collection_id}) to determine the correct fields and types required within fieldData.

Constraints & Error Handling
Rate Limits: Be mindful of strict rate limits (60 or 120 requests/minute per token, based on plan). Site publish is limited to 1/minute. Monitor usage via X-RateLimit-Remaining header. Use webhooks instead of polling.
429 Errors: Exceeding limits triggers a 429 Too Many Requests error (code: "too_many_requests"). Respect the Retry-After header value before retrying.
Other Errors: Expect standard HTTP errors (400, 401, 404, 409, 500). Error responses are JSON objects containing message and code fields (e.g., code: "resource_not_found", code: "conflict"). Handle these errors appropriately.
Versioning: Target API version v2 using the /v2/ path prefix.
"""
