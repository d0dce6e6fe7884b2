from ariadne import ObjectType, QueryType, make_executable_schema

QUOTES_COLLECTION = "quotes"

type_defs = """
    type Quote {
        id: ID!
        text: String
        author: String
    }

    type Query {
        allQuotes: [Quote]
    }
"""

query = QueryType()
quote = ObjectType("Quote")


@query.field("allQuotes")
def resolve_all_quotes(_, info):
    db = info.context["db"]
    return list(db[QUOTES_COLLECTION].find())


@quote.field("id")
def resolve_quote_id(quote_doc, _):
    return str(quote_doc["_id"])


schema = make_executable_schema(type_defs, [query, quote])
