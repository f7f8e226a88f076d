from spacetraveling.errors import FetchError, NotFoundError


def make_summary_doc(uid, date="2021-03-25T19:25:28+0000", **data):
    return {
        "uid": uid,
        "first_publication_date": date,
        "last_publication_date": date,
        "data": {
            "title": data.get("title", uid.replace("-", " ").title()),
            "subtitle": data.get("subtitle", f"About {uid}"),
            "author": data.get("author", "Joseph Oliveira"),
        },
    }


def make_post_doc(uid, content, date="2021-03-25T19:25:28+0000", **data):
    """
    Full post document. ``content`` is a list of ``(heading, [text, ...])``.
    """
    return {
        "uid": uid,
        "first_publication_date": date,
        "last_publication_date": date,
        "data": {
            "title": data.get("title", uid.replace("-", " ").title()),
            "subtitle": data.get("subtitle", ""),
            "author": data.get("author", "Danilo Vieira"),
            "banner": {"url": data.get("banner", f"https://images.test/{uid}.png")},
            "content": [
                {
                    "heading": heading,
                    "body": [{"type": "paragraph", "text": t, "spans": []} for t in body],
                }
                for heading, body in content
            ],
        },
    }


class FakeCMS:
    """
    Minimal in-memory stand-in for PrismicClient.

    ``first_page`` answers query(); ``pages`` maps cursor URLs to responses;
    ``documents`` maps UIDs to full documents. Every call is recorded.
    """

    def __init__(
        self,
        first_page=None,
        pages=None,
        documents=None,
        failing_urls=(),
        failing_uids=(),
    ):
        self.first_page = first_page or {"results": [], "next_page": None}
        self.pages = pages or {}
        self.documents = documents or {}
        self.failing_urls = set(failing_urls)
        self.failing_uids = set(failing_uids)
        self.calls = []

    async def query(self, predicates, **kwargs):
        self.calls.append(("query", list(predicates), kwargs))
        return self.first_page

    async def fetch_page(self, url):
        self.calls.append(("fetch_page", url))
        if url in self.failing_urls:
            raise FetchError(f"boom fetching {url}")
        return self.pages[url]

    async def get_by_uid(self, doc_type, uid):
        self.calls.append(("get_by_uid", doc_type, uid))
        if uid in self.failing_uids:
            raise FetchError(f"boom fetching {uid}")
        if uid not in self.documents:
            raise NotFoundError(doc_type, uid)
        return self.documents[uid]


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds
