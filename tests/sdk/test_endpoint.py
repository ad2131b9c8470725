import pytest

from apibuilder import (
    ContentType,
    Endpoint,
    FormData,
    Method,
    MethodSettings,
    Override,
    RequestProps,
    Server,
    Suffix,
)


class TestEndpoint:
    class TestConstruction:
        def test_root_from_literal_path(self):
            assert Endpoint("/users/").path == "users"

        def test_bound_to_server(self, server: Server, api_url: str):
            assert Endpoint(server, "/users/").path == f"{api_url}/users"

        def test_bound_to_server_without_segment(self, server: Server, api_url: str):
            assert Endpoint(server).path == api_url

        def test_unbound_with_segment(self):
            endpoint = Endpoint(None, "/x/")

            assert endpoint.server is None
            assert endpoint.path == "x"

        def test_defaults_to_unprotected(self, server: Server):
            assert Endpoint(server).is_protected is False

    class TestCreateEndpoint:
        @pytest.mark.parametrize(
            "parent, child",
            [
                ("users", "posts"),
                ("/users/", "/posts/"),
                ("users//", "//posts"),
                ("users", "posts/"),
            ],
        )
        def test_single_slash_between_segments(self, parent: str, child: str):
            assert Endpoint(parent).create_endpoint(child).path == "users/posts"

        def test_keeps_server(self, server: Server, api_url: str):
            child = Endpoint(server, "users").create_endpoint("/7/posts/")

            assert child.server is server
            assert child.path == f"{api_url}/users/7/posts"

        def test_nested_children(self, server: Server, api_url: str):
            child = Endpoint(server).create_endpoint("a").create_endpoint("b")

            assert child.path == f"{api_url}/a/b"

        def test_child_created_after_protect_is_protected(self, server: Server):
            parent = Endpoint(server).protect()

            assert parent.create_endpoint("child").is_protected is True

        def test_protection_is_a_snapshot(self, server: Server):
            parent = Endpoint(server)
            before = parent.create_endpoint("before")
            parent.protect()
            after = parent.create_endpoint("after")
            parent.unprotect()

            assert before.is_protected is False
            assert after.is_protected is True

        def test_child_protection_does_not_leak_to_parent(self, server: Server):
            parent = Endpoint(server)
            parent.create_endpoint("child").protect()

            assert parent.is_protected is False

    class TestProtection:
        def test_methods_chain(self, server: Server):
            endpoint = Endpoint(server)

            assert endpoint.protect() is endpoint
            assert endpoint.is_protected is True
            assert endpoint.unprotect() is endpoint
            assert endpoint.is_protected is False
            assert endpoint.set_protection(True).is_protected is True

    class TestCommonDescriptor:
        def test_no_params_returns_common(self, server: Server, api_url: str):
            props = Endpoint(server, "users").get()()

            assert props.method == Method.GET
            assert props.resolve_url() == f"{api_url}/users"
            assert props.body is None
            assert props.with_token is False
            assert props.raw_response is False
            assert props.content_type is None

        def test_with_token_follows_node(self, server: Server):
            endpoint = Endpoint(server, "users").protect()

            assert endpoint.post()().with_token is True

        def test_with_token_override_wins(self, server: Server):
            endpoint = Endpoint(server, "users").protect()

            assert endpoint.post(with_token=False)().with_token is False

        def test_flag_is_read_when_getter_is_built(self, server: Server):
            endpoint = Endpoint(server, "users")
            getter = endpoint.get()
            endpoint.protect()

            assert getter().with_token is False
            assert endpoint.get()().with_token is True

        def test_static_endpoint_suffix(self, server: Server, api_url: str):
            props = Endpoint(server, "auth").post(endpoint="/login/")()

            assert props.resolve_url() == f"{api_url}/auth/login"

        def test_numeric_endpoint_suffix(self, server: Server, api_url: str):
            props = Endpoint(server, "users").get({"endpoint": 3})()

            assert props.resolve_url() == f"{api_url}/users/3"

        def test_static_content_type_and_raw(self, server: Server):
            props = Endpoint(server, "files").post(
                content_type="multipart/form-data", raw_response=True
            )()

            assert props.content_type == ContentType.FORM_DATA
            assert props.raw_response is True

        def test_method_accepts_strings_and_settings(self, server: Server):
            endpoint = Endpoint(server, "users")

            assert endpoint.method("DELETE")().method == Method.DELETE
            assert (
                endpoint.method(MethodSettings(method="PUT", endpoint="1"))().method
                == Method.PUT
            )

        def test_url_reads_server_lazily(self):
            server = Server(url="https://old.example.com")
            props = Endpoint(server, "users").get()()
            server.api_path = "v2"

            assert props.resolve_url() == "https://old.example.com/v2/users"

        def test_unknown_setting_raises(self, server: Server):
            with pytest.raises(TypeError):
                Endpoint(server).get(unknown=True)

        def test_settings_object_with_mapper(self, server: Server, api_url: str):
            getter = Endpoint(server, "users").get(
                {"fn": lambda user_id: user_id, "with_token": True}
            )
            props = getter(4)

            assert props.resolve_url() == f"{api_url}/users/4"
            assert props.with_token is True

    class TestBodyStrategy:
        def test_params_become_body(self, server: Server, api_url: str):
            props = Endpoint(server, "users").post()({"name": "jane"})

            assert props.body == {"name": "jane"}
            assert props.resolve_url() == f"{api_url}/users"

        @pytest.mark.parametrize(
            "content_type", [ContentType.FORM_DATA, ContentType.FORM_ENCODED]
        )
        def test_form_content_type_converts_mapping(self, server: Server, content_type):
            props = Endpoint(server, "files").post(content_type=content_type)(
                {"name": "a.txt", "size": 3}
            )

            assert props.body == FormData({"name": "a.txt", "size": 3})

        def test_existing_form_data_is_kept(self, server: Server):
            form = FormData({"a": 1})
            props = Endpoint(server).post(content_type=ContentType.FORM_DATA)(form)

            assert props.body is form

        def test_mapper_primitive_result_is_suffix(self, server: Server, api_url: str):
            props = Endpoint(server, "users").delete(lambda user_id: user_id)(12)

            assert props.resolve_url() == f"{api_url}/users/12"
            assert props.body is None

        def test_mapper_tagged_suffix(self, server: Server, api_url: str):
            props = Endpoint(server, "users").put(lambda p: Suffix("a/b/"))(None)

            assert props.resolve_url() == f"{api_url}/users/a/b"

        def test_mapper_override(self, server: Server, api_url: str):
            getter = Endpoint(server, "users").patch(
                lambda p: {
                    "url": p["id"],
                    "entity_id": "avatar",
                    "body": {"name": p["name"]},
                    "with_token": True,
                }
            )
            props = getter({"id": 3, "name": "jane"})

            assert props.resolve_url() == f"{api_url}/users/3/avatar"
            assert props.body == {"name": "jane"}
            assert props.with_token is True
            assert props.method == Method.PATCH

        def test_mapper_content_type_override_converts_body(self, server: Server):
            getter = Endpoint(server, "files").post(
                lambda p: Override(body=p, fields={"content_type": "multipart/form-data"})
            )
            props = getter({"name": "a"})

            assert props.content_type == ContentType.FORM_DATA
            assert props.body == FormData({"name": "a"})

        def test_mapper_override_beats_static_content_type(self, server: Server):
            getter = Endpoint(server, "files").post(
                {
                    "content_type": ContentType.FORM_DATA,
                    "fn": lambda p: {"body": p, "content_type": ContentType.JSON},
                }
            )
            props = getter({"name": "a"})

            assert props.content_type == ContentType.JSON
            assert props.body == {"name": "a"}

        def test_static_form_content_type_applies_to_mapper_body(self, server: Server):
            getter = Endpoint(server).post(
                content_type=ContentType.FORM_ENCODED, fn=lambda p: {"body": p}
            )

            assert getter({"a": 1}).body == FormData({"a": 1})

        def test_mapper_is_called_without_params(self, server: Server, api_url: str):
            calls = []

            def mapper(params):
                calls.append(params)
                return "latest"

            props = Endpoint(server, "builds").post(mapper)()

            assert calls == [None]
            assert props.resolve_url() == f"{api_url}/builds/latest"

        def test_mapper_returning_none_gives_common(self, server: Server, api_url: str):
            props = Endpoint(server, "users").post(lambda p: None)({"a": 1})

            assert props.body is None
            assert props.resolve_url() == f"{api_url}/users"

        def test_mapper_unknown_override_field_raises(self, server: Server):
            getter = Endpoint(server).post(lambda p: {"unexpected": 1})

            with pytest.raises(TypeError):
                getter({})

        def test_getter_does_not_mutate_common(self, server: Server, api_url: str):
            getter = Endpoint(server, "users").post(lambda p: {"url": p, "body": {}})
            getter("a")
            props = getter("b")

            assert props.resolve_url() == f"{api_url}/users/b"
            assert getter(None).resolve_url() == f"{api_url}/users"

    class TestQueryStrategy:
        def test_primitive_param_is_suffix(self, server: Server, api_url: str):
            props = Endpoint(server, "users").get()(42)

            assert props.resolve_url() == f"{api_url}/users/42"

        def test_string_param_is_trimmed_suffix(self, server: Server, api_url: str):
            props = Endpoint(server, "users").get()("/me/")

            assert props.resolve_url() == f"{api_url}/users/me"

        def test_mapping_param_becomes_query(self, server: Server, api_url: str):
            props = Endpoint(server, "users").get()({"page": 2, "tags": ["a", "b"]})

            assert props.resolve_url() == f"{api_url}/users?page=2&tags=a&tags=b"
            assert props.body is None

        @pytest.mark.parametrize("params", [["a", "b"], ("a", "b")])
        def test_sequence_param_is_keyed_by_position(
            self, server: Server, api_url: str, params
        ):
            props = Endpoint(server, "users").get()(params)

            assert props.resolve_url() == f"{api_url}/users?0=a&1=b"

        def test_unsupported_param_raises_type_error(self, server: Server):
            with pytest.raises(TypeError, match="mapping, list or tuple"):
                Endpoint(server, "users").get()({"a", "b"})

        def test_empty_query_is_not_appended(self, server: Server, api_url: str):
            props = Endpoint(server, "users").get()({"page": None})

            assert props.resolve_url() == f"{api_url}/users"

        def test_mapper_body_goes_to_query(self, server: Server, api_url: str):
            props = Endpoint(server, "users").get(lambda p: {"body": {"page": 2}})(None)

            assert props.resolve_url() == f"{api_url}/users?page=2"
            assert props.body is None

        def test_post_keeps_mapper_body(self, server: Server, api_url: str):
            props = Endpoint(server, "users").post(lambda p: {"body": {"page": 2}})(None)

            assert props.body == {"page": 2}
            assert props.resolve_url() == f"{api_url}/users"

        def test_mapper_url_and_query(self, server: Server, api_url: str):
            getter = Endpoint(server, "users").get(
                lambda p: {"url": p["id"], "entity_id": "posts", "body": {"limit": 5}}
            )

            assert (
                getter({"id": 1}).resolve_url()
                == f"{api_url}/users/1/posts?limit=5"
            )

        def test_mapper_suffix(self, server: Server, api_url: str):
            props = Endpoint(server, "users").get(lambda p: p["id"])({"id": 9})

            assert props.resolve_url() == f"{api_url}/users/9"

        def test_mapper_overrides(self, server: Server):
            props = Endpoint(server, "report").get(
                lambda p: {"raw_response": True, "attempt": 2}
            )(None)

            assert props.raw_response is True
            assert props.attempt == 2

        def test_mapper_returning_none_gives_common(self, server: Server, api_url: str):
            props = Endpoint(server, "users").get(lambda p: None)({"page": 1})

            assert props.resolve_url() == f"{api_url}/users"


class TestRequestProps:
    def test_is_frozen(self):
        props = RequestProps(method=Method.GET, url=lambda: "x")

        with pytest.raises(AttributeError):
            props.body = {}  # type: ignore[misc]

    def test_url_is_lazy(self):
        calls = []

        def url() -> str:
            calls.append(1)
            return "x"

        props = RequestProps(method=Method.GET, url=url)

        assert calls == []
        assert props.resolve_url() == "x"
        assert calls == [1]
