from typing import Dict, Any

from src.services.pagination import build_page_variables, page_result, unwrap_connections
from .base import BaseTool, id_property, limit_property, require_found

ORDER_SORT_KEYS = [
    "CREATED_AT", "CUSTOMER_NAME", "ID", "ORDER_NUMBER",
    "PROCESSED_AT", "TOTAL_PRICE", "UPDATED_AT",
]

_SHOP_MONEY = "shopMoney { amount currencyCode }"
_MONEY_BAG = (
    "shopMoney { amount currencyCode } "
    "presentmentMoney { amount currencyCode }"
)

GET_ORDERS_QUERY = """
query GetOrders(
    $first: Int, $last: Int, $after: String, $before: String,
    $query: String, $reverse: Boolean, $sortKey: OrderSortKeys
) {
    orders(first: $first, last: $last, after: $after, before: $before,
           query: $query, reverse: $reverse, sortKey: $sortKey) {
        pageInfo { hasNextPage hasPreviousPage startCursor endCursor }
        edges {
            cursor
            node {
                id
                name
                email
                phone
                createdAt
                updatedAt
                processedAt
                closedAt
                cancelledAt
                cancelReason
                confirmed
                test
                displayFinancialStatus
                displayFulfillmentStatus
                subtotalPriceSet { %(money)s }
                totalPriceSet { %(money)s }
                totalTaxSet { %(money)s }
                totalShippingPriceSet { %(money)s }
                totalDiscountsSet { %(money)s }
                customer { id firstName lastName email phone }
                shippingAddress { address1 address2 city province country zip }
                billingAddress { address1 address2 city province country zip }
                lineItems(first: 10) {
                    edges {
                        node {
                            id
                            title
                            quantity
                            originalUnitPriceSet { %(money)s }
                            discountedUnitPriceSet { %(money)s }
                            variant { id title sku image { url altText } }
                            product { id title handle }
                        }
                    }
                }
                fulfillments {
                    id
                    status
                    createdAt
                    updatedAt
                    trackingInfo { company number url }
                }
                tags
                note
            }
        }
    }
}
""" % {"money": _SHOP_MONEY}

GET_ORDER_BY_ID_QUERY = """
query GetOrderById($id: ID!) {
    order(id: $id) {
        id
        name
        email
        phone
        createdAt
        updatedAt
        processedAt
        closedAt
        cancelledAt
        cancelReason
        confirmed
        test
        displayFinancialStatus
        displayFulfillmentStatus
        subtotalPriceSet { %(bag)s }
        totalPriceSet { %(bag)s }
        totalTaxSet { %(bag)s }
        totalShippingPriceSet { %(bag)s }
        totalDiscountsSet { %(bag)s }
        currentTotalPriceSet { %(bag)s }
        customer {
            id
            firstName
            lastName
            email
            phone
            defaultAddress { address1 address2 city province country zip }
        }
        shippingAddress {
            address1 address2 city province country zip name company phone
        }
        billingAddress {
            address1 address2 city province country zip name company phone
        }
        lineItems(first: 250) {
            edges {
                node {
                    id
                    title
                    quantity
                    originalUnitPriceSet { %(bag)s }
                    discountedUnitPriceSet { %(bag)s }
                    originalTotalSet { %(bag)s }
                    discountedTotalSet { %(bag)s }
                    variant { id title sku price image { url altText } }
                    product { id title handle productType vendor }
                    customAttributes { key value }
                }
            }
        }
        fulfillments {
            id
            status
            createdAt
            updatedAt
            deliveredAt
            estimatedDeliveryAt
            inTransitAt
            trackingInfo { company number url }
            fulfillmentLineItems(first: 250) {
                edges {
                    node { id quantity lineItem { id title } }
                }
            }
        }
        shippingLine {
            title
            code
            source
            originalPriceSet { %(bag)s }
            discountedPriceSet { %(bag)s }
        }
        transactions(first: 250) {
            id
            kind
            status
            amount
            gateway
            createdAt
            processedAt
            errorCode
        }
        refunds {
            id
            createdAt
            note
            totalRefundedSet { %(bag)s }
            refundLineItems(first: 250) {
                edges {
                    node { quantity restockType lineItem { id title } }
                }
            }
        }
        risks(first: 10) { level message display }
        discountApplications(first: 10) {
            edges {
                node {
                    allocationMethod
                    targetSelection
                    targetType
                    value {
                        ... on MoneyV2 { amount currencyCode }
                        ... on PricingPercentageValue { percentage }
                    }
                }
            }
        }
        tags
        note
        customerLocale
        sourceIdentifier
        sourceName
    }
}
""" % {"bag": _MONEY_BAG}


class GetOrdersTool(BaseTool):
    """List or filter orders with cursor pagination and sorting."""

    error_prefix = "Failed to fetch orders"

    @property
    def name(self) -> str:
        return "get-orders"

    @property
    def description(self) -> str:
        return (
            "Get all orders or search/filter orders by various criteria, including "
            "order status, customer, and financial details"
        )

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": (
                        "Optional search query to filter orders "
                        "(e.g., 'email:customer@example.com', 'status:open')"
                    ),
                },
                "limit": limit_property("orders"),
                "after": {
                    "type": "string",
                    "description": "Cursor for pagination - get items after this cursor",
                },
                "before": {
                    "type": "string",
                    "description": "Cursor for pagination - get items before this cursor",
                },
                "reverse": {
                    "type": "boolean",
                    "default": False,
                    "description": "Reverse the order of the returned orders",
                },
                "sortKey": {
                    "type": "string",
                    "enum": ORDER_SORT_KEYS,
                    "default": "PROCESSED_AT",
                    "description": "Sort key for ordering results (default: PROCESSED_AT)",
                },
            },
            "required": [],
        }

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        variables = {"reverse": args["reverse"], "sortKey": args["sortKey"]}
        variables.update(
            build_page_variables(args["limit"], args.get("after"), args.get("before"))
        )
        if args.get("query"):
            variables["query"] = args["query"]

        data = await self.client.execute_query(GET_ORDERS_QUERY, variables)
        orders, page_info, cursors = page_result(data.get("orders"))
        return {"orders": orders, "pageInfo": page_info, "cursors": cursors}


class GetOrderByIdTool(BaseTool):
    """Fetch one order with customer, line item, fulfillment, and financial detail."""

    error_prefix = "Failed to fetch order"

    @property
    def name(self) -> str:
        return "get-order-by-id"

    @property
    def description(self) -> str:
        return (
            "Get a specific order by ID including customer details, line items, "
            "financial data, and fulfillment status"
        )

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {"orderId": id_property("Order")},
            "required": ["orderId"],
        }

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        order_id = args["orderId"]
        data = await self.client.execute_query(GET_ORDER_BY_ID_QUERY, {"id": order_id})
        order = require_found(data.get("order"), "Order", order_id)
        return unwrap_connections(order)
