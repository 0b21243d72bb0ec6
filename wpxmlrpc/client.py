"""WordPress XML-RPC API client.

One method per remote procedure of the WordPress XML-RPC API
(http://codex.wordpress.org/XML-RPC_WordPress_API). Each method only shapes
the positional parameter list and hands it to ``Dispatcher.call``.
"""

from __future__ import annotations

import xmlrpc.client
from datetime import date, datetime
from typing import Any

from wpxmlrpc.codec import create_xmlrpc_datetime
from wpxmlrpc.dispatcher import Dispatcher

# Blog id sent as first parameter; WordPress ignores it on single-site installs.
BLOG_ID = 1


class WordpressClient(Dispatcher):
    """Client for the ``wp.*`` remote procedures.

    Example:
        client = WordpressClient("https://example.com/xmlrpc.php", "bob", "secret")
        post_id = client.new_post("Hello", "<p>First post</p>")
        client.edit_post(post_id, {"post_status": "draft"})
    """

    def _auth_params(self, *extra: Any) -> list[Any]:
        return [BLOG_ID, self.username, self.password, *extra]

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    def get_post(self, post_id: int, fields: list[str] | None = None) -> dict[str, Any]:
        """Retrieve a post of any registered post type."""
        params = self._auth_params(post_id)
        if fields:
            params.append(fields)
        return self.call("wp.getPost", params)

    def get_posts(self, filters: dict[str, Any] | None = None, fields: list[str] | None = None) -> list[dict[str, Any]]:
        """Retrieve list of posts of any registered post type."""
        params = self._auth_params(filters or {})
        if fields:
            params.append(fields)
        return self.call("wp.getPosts", params)

    def new_post(self, title: str, body: str, content: dict[str, Any] | None = None) -> str:
        """Create a new post; returns the new post id.

        ``post_type`` defaults to ``post`` and ``post_status`` to ``publish``.
        """
        struct: dict[str, Any] = {"post_type": "post", "post_status": "publish"}
        struct.update(content or {})
        struct["post_title"] = title
        struct["post_content"] = body
        return self.call("wp.newPost", self._auth_params(struct))

    def edit_post(self, post_id: int, content: dict[str, Any]) -> bool:
        return self.call("wp.editPost", self._auth_params(post_id, content))

    def delete_post(self, post_id: int) -> bool:
        return self.call("wp.deletePost", self._auth_params(post_id))

    def get_post_type(self, post_type_name: str, fields: list[str] | None = None) -> dict[str, Any]:
        return self.call("wp.getPostType", self._auth_params(post_type_name, fields or []))

    def get_post_types(self, filter: dict[str, Any] | None = None, fields: list[str] | None = None) -> dict[str, Any]:
        return self.call("wp.getPostTypes", self._auth_params(filter or {}, fields or []))

    def get_post_formats(self) -> dict[str, str]:
        return self.call("wp.getPostFormats", self._auth_params())

    def get_post_status_list(self) -> dict[str, str]:
        return self.call("wp.getPostStatusList", self._auth_params())

    # -------------------------------------------------------------------------
    # Taxonomies
    # -------------------------------------------------------------------------

    def get_taxonomy(self, taxonomy: str) -> dict[str, Any]:
        return self.call("wp.getTaxonomy", self._auth_params(taxonomy))

    def get_taxonomies(self) -> list[dict[str, Any]]:
        return self.call("wp.getTaxonomies", self._auth_params())

    def get_term(self, term_id: int, taxonomy: str) -> dict[str, Any]:
        # The remote signature takes the taxonomy before the term id.
        return self.call("wp.getTerm", self._auth_params(taxonomy, term_id))

    def get_terms(self, taxonomy: str, filter: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return self.call("wp.getTerms", self._auth_params(taxonomy, filter or {}))

    def new_term(
        self,
        name: str,
        taxonomy: str,
        slug: str | None = None,
        description: str | None = None,
        parent_id: int | None = None,
    ) -> str:
        """Create a new taxonomy term; returns the new term id."""
        content: dict[str, Any] = {"name": name, "taxonomy": taxonomy}
        if slug:
            content["slug"] = slug
        if description:
            content["description"] = description
        if parent_id:
            content["parent"] = parent_id
        return self.call("wp.newTerm", self._auth_params(content))

    def edit_term(self, term_id: int, taxonomy: str, content: dict[str, Any] | None = None) -> bool:
        struct = dict(content or {})
        struct["taxonomy"] = taxonomy
        return self.call("wp.editTerm", self._auth_params(term_id, struct))

    def delete_term(self, term_id: int, taxonomy: str) -> bool:
        return self.call("wp.deleteTerm", self._auth_params(taxonomy, term_id))

    # -------------------------------------------------------------------------
    # Media
    # -------------------------------------------------------------------------

    def get_media_item(self, item_id: int) -> dict[str, Any]:
        return self.call("wp.getMediaItem", self._auth_params(item_id))

    def get_media_library(self, filter: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return self.call("wp.getMediaLibrary", self._auth_params(filter or {}))

    def upload_file(
        self,
        name: str,
        mime: str,
        bits: bytes,
        overwrite: bool | None = None,
        post_id: int | None = None,
    ) -> dict[str, Any]:
        """Upload a media file.

        Args:
            name: File name.
            mime: MIME type, e.g. ``image/jpeg``.
            bits: Raw (not encoded) file content, sent as ``base64``.
            overwrite: Replace an existing file with the same name.
            post_id: Attach the upload to this post.
        """
        struct: dict[str, Any] = {
            "name": name,
            "type": mime,
            "bits": xmlrpc.client.Binary(bytes(bits)),
        }
        if overwrite is not None:
            struct["overwrite"] = overwrite
        if post_id is not None:
            struct["post_id"] = int(post_id)
        return self.call("wp.uploadFile", self._auth_params(struct))

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    def get_comment_count(self, post_id: int) -> dict[str, int]:
        return self.call("wp.getCommentCount", self._auth_params(post_id))

    def get_comment(self, comment_id: int) -> dict[str, Any]:
        return self.call("wp.getComment", self._auth_params(comment_id))

    def get_comments(self, filter: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return self.call("wp.getComments", self._auth_params(filter or {}))

    def new_comment(self, post_id: int, comment: dict[str, Any]) -> int:
        return self.call("wp.newComment", self._auth_params(post_id, comment))

    def edit_comment(self, comment_id: int, comment: dict[str, Any]) -> bool:
        return self.call("wp.editComment", self._auth_params(comment_id, comment))

    def delete_comment(self, comment_id: int) -> bool:
        return self.call("wp.deleteComment", self._auth_params(comment_id))

    def get_comment_status_list(self) -> dict[str, str]:
        return self.call("wp.getCommentStatusList", self._auth_params())

    # -------------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------------

    def get_options(self, options: list[str] | None = None) -> dict[str, Any]:
        """Retrieve blog options; all of them when ``options`` is empty."""
        if options:
            return self.call("wp.getOptions", self._auth_params(options))
        return self.call("wp.getOptions", self._auth_params())

    def set_options(self, options: dict[str, Any]) -> dict[str, Any]:
        return self.call("wp.setOptions", self._auth_params(options))

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def get_users_blogs(self) -> list[dict[str, Any]]:
        """Retrieve the blogs of the current user (no blog id parameter)."""
        return self.call("wp.getUsersBlogs", [self.username, self.password])

    def get_user(self, user_id: int, fields: list[str] | None = None) -> dict[str, Any]:
        params = self._auth_params(user_id)
        if fields:
            params.append(fields)
        return self.call("wp.getUser", params)

    def get_users(self, filters: dict[str, Any] | None = None, fields: list[str] | None = None) -> list[dict[str, Any]]:
        params = self._auth_params(filters or {})
        if fields:
            params.append(fields)
        return self.call("wp.getUsers", params)

    def get_profile(self, fields: list[str] | None = None) -> dict[str, Any]:
        params = self._auth_params()
        if fields:
            params.append(fields)
        return self.call("wp.getProfile", params)

    def edit_profile(self, content: dict[str, Any]) -> bool:
        return self.call("wp.editProfile", self._auth_params(content))

    # -------------------------------------------------------------------------
    # Misc
    # -------------------------------------------------------------------------

    def call_custom_method(self, method: str, params: list[Any] | tuple[Any, ...]) -> Any:
        """Call any XML-RPC method with a caller-built parameter list."""
        return self.call(method, params)

    @staticmethod
    def create_xmlrpc_datetime(value: datetime | date) -> xmlrpc.client.DateTime:
        """Tag a date/time value for fields such as ``post_date``."""
        return create_xmlrpc_datetime(value)
