"""Canonical endpoint documentation table.

Schemas follow the OpenAPI fragments published on the documentation site.
"""

from .endpoint_catalog import EndpointMeta


def _obj(properties, required=None):
    schema = {"type": "object", "properties": properties}
    if required:
        schema["required"] = list(required)
    return schema


def _array(item_type=None):
    schema = {"type": "array"}
    if item_type:
        schema["items"] = {"type": item_type}
    return schema


_STR = {"type": "string"}
_INT = {"type": "integer"}
_NUM = {"type": "number"}
_BOOL = {"type": "boolean"}

_ID_PARAM = {"name": "id", "in": "path", "type": "integer", "required": True}

_PAGED_LIST = _obj({"data": _array(), "totalRecords": _INT})


CAMPAIGN_ENDPOINTS = [
    EndpointMeta(
        path="/api/v3/campaign",
        method="POST",
        summary="Create a new campaign",
        description="Creates a new advertising campaign with specified targeting, budget, and creative settings.",
        category="campaigns",
        doc_page="/guidelines/campaign-api#create-a-campaign",
        tags=("campaign", "create"),
        request_schema=_obj(
            {
                "campaignName": {"type": "string", "description": "Name of the campaign"},
                "advertiserId": {"type": "integer", "description": "Advertiser/customer ID"},
                "startDate": {"type": "string", "format": "date", "description": "Campaign start date"},
                "endDate": {"type": "string", "format": "date", "description": "Campaign end date"},
                "budgetTotal": {"type": "number", "description": "Total campaign budget in dollars"},
                "budgetDay": {"type": "number", "description": "Daily budget cap"},
                "maxBid": {"type": "number", "description": "Maximum bid price"},
                "campaignTypeId": {"type": "integer", "description": "Campaign type (1=standard, 14=PG)"},
                "creativeIds": _array("integer"),
                "audienceIds": _array("integer"),
            },
            required=("campaignName", "advertiserId", "startDate", "endDate", "budgetTotal"),
        ),
        response_schema=_obj({
            "success": _BOOL,
            "data": _obj({"campaignId": _INT, "campaignStatus": _STR}),
        }),
    ),
    EndpointMeta(
        path="/api/v3/campaign/{id}",
        method="GET",
        summary="Get campaign details",
        description="Retrieves detailed information about a specific campaign including targeting, budget, and performance data.",
        category="campaigns",
        doc_page="/guidelines/campaign-api#get-campaign-details",
        tags=("campaign", "read", "details"),
        response_schema=_obj({
            "success": _BOOL,
            "responseObject": _obj({
                "campaignId": _INT,
                "campaignName": _STR,
                "campaignStatus": _STR,
                "startDate": _STR,
                "endDate": _STR,
                "budgetTotal": _NUM,
                "spent": _NUM,
            }),
        }),
        parameters=[dict(_ID_PARAM, description="Campaign ID")],
    ),
    EndpointMeta(
        path="/api/v3/campaign/basic/list",
        method="POST",
        summary="List campaigns with filters",
        description="Retrieves a paginated list of campaigns with optional filtering by status, date range, and search terms.",
        category="campaigns",
        doc_page="/guidelines/campaign-api#get-campaign-list",
        tags=("campaign", "list", "search"),
        request_schema=_obj({
            "status": {"type": "string", "enum": ["running", "paused", "pending", "expired", "deleted"]},
            "searchField": _STR,
            "pageNo": {"type": "integer", "default": 1},
            "pageSize": {"type": "integer", "default": 25},
            "sortBy": _STR,
            "sortOrder": {"type": "string", "enum": ["asc", "desc"]},
        }),
        response_schema=_obj({
            "data": {"type": "array", "items": {"type": "object"}},
            "totalRecords": _INT,
            "filteredRecords": _INT,
        }),
    ),
    EndpointMeta(
        path="/api/v3/campaign/budget",
        method="PATCH",
        summary="Update campaign budget",
        description="Updates the total budget, daily budget, or max bid for one or more campaigns.",
        category="campaigns",
        doc_page="/guidelines/campaign-api#update-campaign-budget",
        tags=("campaign", "update", "budget"),
        request_schema=_obj(
            {
                "campaignIds": {"type": "string", "description": "Comma-separated campaign IDs"},
                "totalBudget": _NUM,
                "dailyBudget": _NUM,
                "maxBid": _NUM,
                "totalBudgetUpdateType": {"type": "string", "enum": ["change", "addition", "distribution"]},
            },
            required=("campaignIds",),
        ),
        response_schema=_obj({"success": _BOOL, "message": _STR}),
    ),
    EndpointMeta(
        path="/api/v3/campaign/status",
        method="PUT",
        summary="Update campaign status",
        description="Changes the status of one or more campaigns (pause, resume, delete).",
        category="campaigns",
        doc_page="/guidelines/campaign-api#update-campaign-status",
        tags=("campaign", "update", "status"),
        request_schema=_obj(
            {
                "campaignIds": {"type": "string", "description": "Comma-separated campaign IDs"},
                "status": {"type": "string", "enum": ["running", "paused", "deleted"]},
            },
            required=("campaignIds", "status"),
        ),
        response_schema=_obj({
            "success": _BOOL,
            "data": {"type": "array", "items": {"type": "object"}},
        }),
    ),
]

REPORT_ENDPOINTS = [
    EndpointMeta(
        path="/api/v3/ra/report/execute",
        method="POST",
        summary="Execute a report",
        description="Generates a report based on specified dimensions, metrics, and filters.",
        category="reports",
        doc_page="/guidelines/reports-api#execute-report",
        tags=("report", "execute", "analytics"),
        request_schema=_obj(
            {
                "startDate": {"type": "string", "format": "date"},
                "endDate": {"type": "string", "format": "date"},
                "dimensions": _array("string"),
                "metrics": _array("string"),
                "campaignIds": _array("integer"),
                "timezoneId": _INT,
                "pageNo": _INT,
                "pageSize": _INT,
            },
            required=("startDate", "endDate", "dimensions", "metrics"),
        ),
        response_schema=_obj({"reportData": _array(), "totalRecords": _INT}),
    ),
    EndpointMeta(
        path="/api/v3/ra/report/schedule",
        method="POST",
        summary="Schedule a recurring report",
        description="Creates a scheduled report that runs automatically at specified intervals.",
        category="reports",
        doc_page="/guidelines/reports-api#schedule-report",
        tags=("report", "schedule", "automation"),
        request_schema=_obj(
            {
                "reportName": _STR,
                "frequency": {"type": "string", "enum": ["daily", "weekly", "monthly"]},
                "emailRecipients": _array("string"),
                "format": {"type": "string", "enum": ["csv", "xlsx"]},
            },
            required=("reportName", "startDate", "endDate", "dimensions", "metrics", "frequency"),
        ),
        response_schema=_obj({"success": _BOOL, "scheduleId": _INT}),
    ),
]

AUDIENCE_ENDPOINTS = [
    EndpointMeta(
        path="/api/v2/audience/matched/add",
        method="POST",
        summary="Upload a matched audience",
        description="Creates a new matched audience by uploading hashed identifiers (emails, MAIDs, etc.).",
        category="audiences",
        doc_page="/guidelines/audience-api#upload-matched-audience",
        tags=("audience", "matched", "upload"),
        request_schema={
            "type": "multipart/form-data",
            "properties": {
                "audienceName": _STR,
                "audienceFile": {"type": "file", "description": "CSV file with hashed identifiers"},
                "columnMapping": {"type": "array", "description": "Mapping of columns to identifier types"},
            },
        },
        response_schema=_obj({
            "success": _BOOL,
            "data": _obj({"audienceId": _INT, "matchRate": _NUM}),
        }),
    ),
    EndpointMeta(
        path="/api/v3/audience/contextual/create",
        method="POST",
        summary="Create a contextual audience",
        description="Creates a new contextual audience based on keywords, topics, or URL patterns.",
        category="audiences",
        doc_page="/guidelines/audience-api#create-contextual-audience",
        tags=("audience", "contextual", "create"),
        request_schema=_obj(
            {
                "audienceName": _STR,
                "keywords": _array("string"),
                "topics": _array("integer"),
                "urlPatterns": _array("string"),
            },
            required=("audienceName", "keywords"),
        ),
        response_schema=_obj({"success": _BOOL, "data": _obj({"audienceId": _INT})}),
    ),
    EndpointMeta(
        path="/api/v2/audience/search",
        method="POST",
        summary="Search and list audiences",
        description="Retrieves a paginated list of audiences with optional filtering.",
        category="audiences",
        doc_page="/guidelines/audience-api#list-audiences",
        tags=("audience", "list", "search"),
        request_schema=_obj({
            "audienceTypeIds": _array("integer"),
            "statusIds": _array("integer"),
            "searchField": _STR,
            "pageNo": _INT,
            "pageSize": _INT,
        }),
        response_schema=_PAGED_LIST,
    ),
]

CREATIVE_ENDPOINTS = [
    EndpointMeta(
        path="/api/v3/creative/add",
        method="POST",
        summary="Upload a creative asset",
        description="Uploads a new creative asset (image, video, HTML5, native, or audio).",
        category="creatives",
        doc_page="/guidelines/creative-api#upload-creative",
        tags=("creative", "upload", "asset"),
        request_schema={
            "type": "multipart/form-data",
            "required": ["creativeName", "creativeTypeId"],
            "properties": {
                "creativeName": _STR,
                "creativeTypeId": {"type": "integer", "description": "11=image, 13=video, 14=HTML5, 15=native, 17=audio"},
                "creativeFile": {"type": "file"},
                "clickUrl": _STR,
                "width": _INT,
                "height": _INT,
            },
        },
        response_schema=_obj({
            "success": _BOOL,
            "data": _obj({"creativeId": _INT, "creativeStatus": _STR}),
        }),
    ),
    EndpointMeta(
        path="/api/v3/creative/{id}",
        method="GET",
        summary="Get creative details",
        description="Retrieves detailed information about a specific creative asset.",
        category="creatives",
        doc_page="/guidelines/creative-api#get-creative-details",
        tags=("creative", "read", "details"),
        response_schema=_obj({
            "success": _BOOL,
            "data": _obj({
                "creativeId": _INT,
                "creativeName": _STR,
                "creativeTypeId": _INT,
                "status": _STR,
                "width": _INT,
                "height": _INT,
                "clickUrl": _STR,
            }),
        }),
        parameters=[dict(_ID_PARAM)],
    ),
    EndpointMeta(
        path="/api/v2/creative/list",
        method="POST",
        summary="List creative assets",
        description="Retrieves a paginated list of creative assets with optional filtering.",
        category="creatives",
        doc_page="/guidelines/creative-api#list-creatives",
        tags=("creative", "list", "search"),
        request_schema=_obj({
            "creativeTypeIds": _array("integer"),
            "statusIds": _array("integer"),
            "searchField": _STR,
            "pageNo": _INT,
            "pageSize": _INT,
        }),
        response_schema=_PAGED_LIST,
    ),
]

CONVERSION_ENDPOINTS = [
    EndpointMeta(
        path="/api/v3/conversion/add",
        method="POST",
        summary="Create a conversion tracker",
        description="Creates a new conversion tracking pixel or postback.",
        category="conversions",
        doc_page="/guidelines/conversion-api#create-conversion",
        tags=("conversion", "tracking", "create"),
        request_schema=_obj(
            {
                "conversionName": _STR,
                "conversionTypeId": {"type": "integer", "description": "1=pixel, 2=postback"},
                "advertiserDomain": _STR,
                "attributionWindow": {"type": "integer", "description": "Days for click attribution"},
                "viewAttributionWindow": {"type": "integer", "description": "Days for view attribution"},
            },
            required=("conversionName", "conversionTypeId"),
        ),
        response_schema=_obj({
            "success": _BOOL,
            "data": _obj({"conversionId": _INT, "pixelCode": _STR}),
        }),
    ),
    EndpointMeta(
        path="/api/v3/conversion/{id}",
        method="GET",
        summary="Get conversion details",
        description="Retrieves detailed information about a conversion tracker.",
        category="conversions",
        doc_page="/guidelines/conversion-api#get-conversion-details",
        tags=("conversion", "read", "details"),
        response_schema=_obj({
            "success": _BOOL,
            "data": _obj({
                "conversionId": _INT,
                "conversionName": _STR,
                "pixelCode": _STR,
                "totalConversions": _INT,
            }),
        }),
        parameters=[dict(_ID_PARAM)],
    ),
]

INVENTORY_ENDPOINTS = [
    EndpointMeta(
        path="/api/v2/inv/pmp/deal/list",
        method="POST",
        summary="List PMP deals",
        description="Retrieves a list of available Private Marketplace deals.",
        category="inventory",
        doc_page="/guidelines/inventory-api#list-pmp-deals",
        tags=("inventory", "pmp", "deals", "list"),
        request_schema=_obj({
            "searchField": _STR,
            "statusIds": _array("integer"),
            "pageNo": _INT,
            "pageSize": _INT,
        }),
        response_schema=_PAGED_LIST,
    ),
    EndpointMeta(
        path="/api/v3/inv/group/add",
        method="POST",
        summary="Create inventory group",
        description="Creates a new inventory group for organizing and targeting inventory.",
        category="inventory",
        doc_page="/guidelines/inventory-api#create-inventory-group",
        tags=("inventory", "group", "create"),
        request_schema=_obj(
            {
                "groupName": _STR,
                "inventoryGroupTypeId": _INT,
                "inventoryIds": _array("integer"),
            },
            required=("groupName", "inventoryGroupTypeId"),
        ),
        response_schema=_obj({"success": _BOOL, "data": _obj({"groupId": _INT})}),
    ),
]

DASHBOARD_ENDPOINTS = [
    EndpointMeta(
        path="/api/v2/rb/resultDashboard",
        method="POST",
        summary="Get dashboard performance data",
        description="Retrieves aggregated performance metrics for the dashboard view.",
        category="dashboard",
        doc_page="/guidelines/dashboard-api#get-dashboard-data",
        tags=("dashboard", "metrics", "performance"),
        request_schema=_obj(
            {
                "dateRange": _obj({"startDate": _STR, "endDate": _STR}),
                "dimension": _obj({"filter": {"type": "object"}, "value": _array()}),
                "timezone": {"type": "object"},
                "campaignIds": _array(),
                "sortBy": _STR,
                "sortType": _STR,
            },
            required=("dateRange",),
        ),
        response_schema=_obj({
            "data": _array(),
            "totalRecords": _INT,
            "aggregations": {"type": "object"},
        }),
    ),
]

ENDPOINTS = (
    CAMPAIGN_ENDPOINTS
    + REPORT_ENDPOINTS
    + AUDIENCE_ENDPOINTS
    + CREATIVE_ENDPOINTS
    + CONVERSION_ENDPOINTS
    + INVENTORY_ENDPOINTS
    + DASHBOARD_ENDPOINTS
)
