# Storefront GraphQL documents. Fetch windows are fixed: 10 search hits, 250 variants,
# one best seller.

SEARCH_PRODUCTS = """
query SearchProducts($q: String!) {
  products(first: 10, query: $q) {
    edges {
      node {
        title
        handle
        featuredImage { url }
        priceRange {
          minVariantPrice { amount currencyCode }
        }
      }
    }
  }
}
"""

PRODUCT_OPTIONS = """
query GetProductOptions($handle: String!) {
  product(handle: $handle) {
    title
    handle
    options { name values }
    variants(first: 250) {
      nodes {
        availableForSale
        selectedOptions { name value }
      }
    }
  }
}
"""

PRODUCT_VARIANTS = """
query GetProduct($handle: String!) {
  product(handle: $handle) {
    title
    handle
    options { name values }
    variants(first: 250) {
      nodes {
        id
        title
        availableForSale
        selectedOptions { name value }
        price { amount currencyCode }
      }
    }
  }
}
"""

COLLECTION_TOP_PRODUCT = """
query BestSeller($handle: String!) {
  collection(handle: $handle) {
    title
    products(first: 1) {
      edges {
        node {
          title
          handle
          featuredImage { url }
          priceRange {
            minVariantPrice { amount currencyCode }
          }
        }
      }
    }
  }
}
"""


def title_search(term: str) -> str:
    return f"title:*{term}*"
