import xmlrpc.client
from datetime import datetime, timedelta, timezone

import pytest

from wpxmlrpc import WordpressClient
from wpxmlrpc.utils.exceptions import RemoteFault

ENDPOINT = "https://example.com/xmlrpc.php"
AUTH = (1, "bob", "pw")


@pytest.fixture
def client(stub_transport) -> WordpressClient:
    return WordpressClient(ENDPOINT, "bob", "pw", transport=stub_transport)


@pytest.mark.parametrize(
    ("invoke", "method", "extra"),
    [
        (lambda c: c.get_post(229), "wp.getPost", (229,)),
        (lambda c: c.get_post(229, ["post_title"]), "wp.getPost", (229, ["post_title"])),
        (lambda c: c.get_posts({"number": 5}), "wp.getPosts", ({"number": 5},)),
        (lambda c: c.get_posts(), "wp.getPosts", ({},)),
        (lambda c: c.edit_post(7, {"post_status": "draft"}), "wp.editPost", (7, {"post_status": "draft"})),
        (lambda c: c.delete_post(7), "wp.deletePost", (7,)),
        (lambda c: c.get_post_type("page"), "wp.getPostType", ("page", [])),
        (lambda c: c.get_post_types(), "wp.getPostTypes", ({}, [])),
        (lambda c: c.get_post_formats(), "wp.getPostFormats", ()),
        (lambda c: c.get_post_status_list(), "wp.getPostStatusList", ()),
        (lambda c: c.get_taxonomy("category"), "wp.getTaxonomy", ("category",)),
        (lambda c: c.get_taxonomies(), "wp.getTaxonomies", ()),
        (lambda c: c.get_term(3, "category"), "wp.getTerm", ("category", 3)),
        (lambda c: c.get_terms("post_tag", {"number": 2}), "wp.getTerms", ("post_tag", {"number": 2})),
        (lambda c: c.edit_term(3, "category", {"name": "News"}), "wp.editTerm", (3, {"name": "News", "taxonomy": "category"})),
        (lambda c: c.delete_term(3, "category"), "wp.deleteTerm", ("category", 3)),
        (lambda c: c.get_media_item(42), "wp.getMediaItem", (42,)),
        (lambda c: c.get_media_library({"number": 5}), "wp.getMediaLibrary", ({"number": 5},)),
        (lambda c: c.get_comment_count(7), "wp.getCommentCount", (7,)),
        (lambda c: c.get_comment(11), "wp.getComment", (11,)),
        (lambda c: c.get_comments({"post_id": 7}), "wp.getComments", ({"post_id": 7},)),
        (lambda c: c.new_comment(7, {"content": "Nice"}), "wp.newComment", (7, {"content": "Nice"})),
        (lambda c: c.edit_comment(11, {"status": "hold"}), "wp.editComment", (11, {"status": "hold"})),
        (lambda c: c.delete_comment(11), "wp.deleteComment", (11,)),
        (lambda c: c.get_comment_status_list(), "wp.getCommentStatusList", ()),
        (lambda c: c.get_options(), "wp.getOptions", ()),
        (lambda c: c.get_options(["blog_title"]), "wp.getOptions", (["blog_title"],)),
        (lambda c: c.set_options({"blog_title": "Hi"}), "wp.setOptions", ({"blog_title": "Hi"},)),
        (lambda c: c.get_user(2), "wp.getUser", (2,)),
        (lambda c: c.get_users({"role": "editor"}, ["username"]), "wp.getUsers", ({"role": "editor"}, ["username"])),
        (lambda c: c.get_profile(), "wp.getProfile", ()),
        (lambda c: c.edit_profile({"nickname": "b"}), "wp.editProfile", ({"nickname": "b"},)),
    ],
)
def test_catalog_methods_prepend_blog_and_credentials(client, stub_transport, envelopes, invoke, method, extra) -> None:
    stub_transport.responses.append(envelopes.success(True))

    assert invoke(client) is True

    sent_method, params = stub_transport.last_call()
    assert sent_method == method
    assert params == AUTH + extra


def test_new_post_defaults_type_and_status(client, stub_transport, envelopes) -> None:
    stub_transport.responses.append(envelopes.success("230"))

    assert client.new_post("Hello", "<p>Body</p>", {"post_status": "draft", "post_title": "ignored"}) == "230"

    _, params = stub_transport.last_call()
    assert params[:3] == AUTH
    assert params[3] == {
        "post_type": "post",
        "post_status": "draft",
        "post_title": "Hello",
        "post_content": "<p>Body</p>",
    }


def test_new_term_only_sends_given_fields(client, stub_transport, envelopes) -> None:
    stub_transport.responses.extend([envelopes.success("5"), envelopes.success("6")])

    client.new_term("News", "category")
    _, params = stub_transport.last_call()
    assert params[3] == {"name": "News", "taxonomy": "category"}

    client.new_term("Local", "category", slug="local", description="Local news", parent_id=5)
    _, params = stub_transport.last_call()
    assert params[3] == {
        "name": "Local",
        "taxonomy": "category",
        "slug": "local",
        "description": "Local news",
        "parent": 5,
    }


def test_upload_file_sends_base64_bits(client, stub_transport, envelopes) -> None:
    stub_transport.responses.append(envelopes.success({"id": "77", "url": "https://example.com/a.png"}))

    result = client.upload_file("a.png", "image/png", b"\x89PNG\r\n", overwrite=True, post_id="12")

    assert result["id"] == "77"
    assert b"<base64>" in client.last_request
    _, params = stub_transport.last_call()
    struct = params[3]
    assert struct["name"] == "a.png"
    assert struct["type"] == "image/png"
    assert struct["bits"].data == b"\x89PNG\r\n"
    assert struct["overwrite"] is True
    assert struct["post_id"] == 12


def test_get_users_blogs_has_no_blog_id(client, stub_transport, envelopes) -> None:
    stub_transport.responses.append(envelopes.success([{"blogid": "1", "isAdmin": True}]))

    assert client.get_users_blogs() == [{"blogid": "1", "isAdmin": True}]
    assert stub_transport.last_call() == ("wp.getUsersBlogs", ("bob", "pw"))


def test_call_custom_method_passes_params_through(client, stub_transport, envelopes) -> None:
    stub_transport.responses.append(envelopes.success("pong"))

    assert client.call_custom_method("demo.sayHello", []) == "pong"
    assert stub_transport.last_call() == ("demo.sayHello", ())


def test_create_xmlrpc_datetime_keeps_offset() -> None:
    value = datetime(2014, 3, 20, 10, 30, tzinfo=timezone(timedelta(hours=7)))
    tagged = WordpressClient.create_xmlrpc_datetime(value)
    assert isinstance(tagged, xmlrpc.client.DateTime)
    assert tagged.value == "20140320T10:30:00+0700"


def test_media_item_for_guest_is_forbidden(stub_transport, envelopes) -> None:
    stub_transport.responses.append(envelopes.fault(403, "You do not have permission to upload files."))
    guest = WordpressClient(ENDPOINT, "guest", "guest", transport=stub_transport)

    with pytest.raises(RemoteFault):
        guest.get_media_item(42)

    assert guest.error_message == "xmlrpc: You do not have permission to upload files. (403)"
    assert stub_transport.last_call() == ("wp.getMediaItem", (1, "guest", "guest", 42))


def test_media_item_not_found(client, stub_transport, envelopes) -> None:
    stub_transport.responses.append(envelopes.fault(404, "Invalid attachment ID."))

    with pytest.raises(RemoteFault) as exc_info:
        client.get_media_item(9999)

    assert exc_info.value.fault_code == 404
    assert client.get_error_message() == "xmlrpc: Invalid attachment ID. (404)"


def test_media_library_returns_items(client, stub_transport, envelopes) -> None:
    items = [{"attachment_id": str(i), "link": f"https://example.com/{i}.jpg"} for i in range(5)]
    stub_transport.responses.append(envelopes.success(items))

    library = client.get_media_library({"number": 5})

    assert len(library) == 5
    assert library[0]["link"] == "https://example.com/0.jpg"
