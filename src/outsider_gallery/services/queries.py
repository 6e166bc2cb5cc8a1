"""GraphQL documents for catalog reads."""

MEDIA_FRAGMENT = """
fragment MediaParts on MetafieldReference {
  __typename
  ... on MediaImage { image { url width height altText } }
  ... on GenericFile { url previewImage { url } }
  ... on Video {
    sources { url mimeType }
    previewImage { url width height altText }
  }
}
"""

# Metaobject fields one level deep, with linked metaobjects expanded once.
FIELD_FRAGMENT = (
    """
fragment FieldParts on MetaobjectField {
  key
  type
  value
  reference {
    ...MediaParts
    ... on Metaobject {
      handle
      type
      fields {
        key
        type
        value
        reference { ...MediaParts }
        references(first: 50) { nodes { ...MediaParts } }
      }
    }
  }
  references(first: 50) {
    nodes {
      ...MediaParts
      ... on Metaobject {
        handle
        type
        fields { key type value reference { ...MediaParts } }
      }
    }
  }
}
"""
    + MEDIA_FRAGMENT
)

_LINKED_METAFIELD = """{
    value
    type
    reference {
      __typename
      ... on Metaobject { handle type fields { key type value reference { ...MediaParts } } }
    }
  }"""

_PLAIN_METAFIELD = "{ value type }"

# Every custom metafield uses an alias ending in ``Field`` so products parse uniformly.
ARTWORK_FRAGMENT = (
    f"""
fragment ArtworkParts on Product {{
  id
  handle
  title
  vendor
  availableForSale
  onlineStoreUrl
  updatedAt
  description
  descriptionHtml
  featuredImage {{ url width height altText }}
  images(first: 12) {{ nodes {{ url width height altText }} }}
  priceRange {{ minVariantPrice {{ amount currencyCode }} }}
  variants(first: 10) {{ nodes {{ id title availableForSale quantityAvailable }} }}
  artistField: metafield(namespace: "custom", key: "artist") {_LINKED_METAFIELD}
  statusField: metafield(namespace: "custom", key: "status") {_LINKED_METAFIELD}
  yearField: metafield(namespace: "custom", key: "year") {_PLAIN_METAFIELD}
  mediumField: metafield(namespace: "custom", key: "medium") {_PLAIN_METAFIELD}
  dimensionsField: metafield(namespace: "custom", key: "dimensions") {_PLAIN_METAFIELD}
  widthField: metafield(namespace: "custom", key: "width") {_PLAIN_METAFIELD}
  heightField: metafield(namespace: "custom", key: "height") {_PLAIN_METAFIELD}
  depthField: metafield(namespace: "custom", key: "depth") {_PLAIN_METAFIELD}
  soldField: metafield(namespace: "custom", key: "sold") {_PLAIN_METAFIELD}
  captionField: metafield(namespace: "custom", key: "caption") {_PLAIN_METAFIELD}
  fullCaptionField: metafield(namespace: "custom", key: "full_caption") {_PLAIN_METAFIELD}
  additionalInfoField: metafield(namespace: "custom", key: "additional_info") {_PLAIN_METAFIELD}
  additionalField: metafield(namespace: "custom", key: "additional") {_PLAIN_METAFIELD}
  notesField: metafield(namespace: "custom", key: "notes") {_PLAIN_METAFIELD}
  exhibitionsField: metafield(namespace: "custom", key: "exhibitions") {{
    value
    type
    reference {{ __typename ... on Metaobject {{ handle type }} }}
    references(first: 50) {{ nodes {{ __typename ... on Metaobject {{ handle type }} }} }}
  }}
}}
"""
    + MEDIA_FRAGMENT
)

EXHIBITIONS_QUERY = (
    """
query Exhibitions($first: Int!) {
  metaobjects(type: "exhibitions", first: $first, reverse: true) {
    nodes { handle updatedAt fields { ...FieldParts } }
  }
}
"""
    + FIELD_FRAGMENT
)

EXHIBITION_QUERY = (
    """
query Exhibition($handle: String!) {
  metaobject(handle: { type: "exhibitions", handle: $handle }) {
    handle
    updatedAt
    fields { ...FieldParts }
  }
}
"""
    + FIELD_FRAGMENT
)

ARTISTS_QUERY = (
    """
query Artists($first: Int!) {
  metaobjects(type: "artist", first: $first) {
    nodes { handle updatedAt fields { ...FieldParts } }
  }
}
"""
    + FIELD_FRAGMENT
)

ARTIST_QUERY = (
    """
query Artist($handle: String!) {
  metaobject(handle: { type: "artist", handle: $handle }) {
    handle
    updatedAt
    fields { ...FieldParts }
  }
}
"""
    + FIELD_FRAGMENT
)

ARTIST_BY_ID_QUERY = (
    """
query ArtistById($id: ID!) {
  node(id: $id) {
    __typename
    ... on Metaobject { handle updatedAt fields { ...FieldParts } }
  }
}
"""
    + FIELD_FRAGMENT
)

INFORMATION_QUERY = (
    """
query Information {
  metaobjects(type: "information", first: 20) {
    nodes { handle updatedAt fields { ...FieldParts } }
  }
}
"""
    + FIELD_FRAGMENT
)

PRODUCT_QUERY = (
    """
query Artwork($handle: String!) {
  product(handle: $handle) { ...ArtworkParts }
}
"""
    + ARTWORK_FRAGMENT
)

ACTIVE_PRODUCTS_QUERY = (
    """
query ActiveArtworks($first: Int!) {
  products(first: $first, query: "status:active") { nodes { ...ArtworkParts } }
}
"""
    + ARTWORK_FRAGMENT
)

RECENT_PRODUCTS_QUERY = (
    """
query RecentArtworks($first: Int!) {
  products(first: $first, sortKey: UPDATED_AT, reverse: true, query: "status:active") {
    nodes { ...ArtworkParts }
  }
}
"""
    + ARTWORK_FRAGMENT
)

ALL_PRODUCTS_QUERY = (
    """
query AllArtworks($first: Int!) {
  products(first: $first) { nodes { ...ArtworkParts } }
}
"""
    + ARTWORK_FRAGMENT
)

SITEMAP_EXHIBITIONS_QUERY = """
query SitemapExhibitions($first: Int!) {
  metaobjects(type: "exhibitions", first: $first, reverse: true) {
    nodes { handle updatedAt fields { key type value } }
  }
}
"""

SITEMAP_ARTISTS_QUERY = """
query SitemapArtists($first: Int!) {
  metaobjects(type: "artist", first: $first, reverse: true) {
    nodes { handle updatedAt fields { key type value } }
  }
}
"""

SITEMAP_PRODUCTS_QUERY = (
    f"""
query SitemapProducts($first: Int!) {{
  products(first: $first, sortKey: UPDATED_AT, reverse: true, query: "status:active") {{
    nodes {{
      handle
      updatedAt
      statusField: metafield(namespace: "custom", key: "status") {_LINKED_METAFIELD}
    }}
  }}
}}
"""
    + MEDIA_FRAGMENT
)
