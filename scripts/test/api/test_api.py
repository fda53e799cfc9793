"""
HTTP 接口测试

通过 TestClient 调用路由，验证请求解析、标准响应格式和 404/400 映射。

使用方法:
    pytest scripts/test/api
    python scripts/test/api/test_api.py
"""

import os
import sys
import logging
from pathlib import Path
from unittest.mock import patch

# 添加项目根目录和测试目录到路径
project_root = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(Path(__file__).parent.parent))
os.environ.setdefault("DATABASE_URL", "sqlite://")

from app.models.author import Author
from app.models.file import File
from test_utils import *

logger = logging.getLogger(__name__)

API = "/api"


def _upload(client, author_id="42", names=("a.png", "b.png"), folders=("pics", "pics"), nsfw=("0", "1"), **extra):
    files = [("File", (name, f"bytes-{name}".encode(), "image/png")) for name in names]
    data = {"Folder": list(folders), "NSFW": list(nsfw), "Id": author_id}
    data.update(extra)
    return client.post(f"{API}/upload", files=files, data=data)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["data"]["database"] == "connected"


def test_upload_and_list(client, content_root):
    response = _upload(client)
    assert response.status_code == 200
    body = response.json()
    assert body["code"] == 200
    assert body["data"]["author"]["authorId"] == 42
    files = body["data"]["files"]
    assert [f["nsfw"] for f in files] == [False, True]
    assert [f["folder"] for f in files] == ["pics", "pics"]
    for f in files:
        assert os.path.exists(os.path.join(content_root, f["fileUrl"]))

    assert client.get(f"{API}/all/length").json()["data"] == 2
    listing = client.get(f"{API}/all").json()["data"]
    assert [f["fileUrl"] for f in listing] == ["app/build/files/a.png", "app/build/files/b.png"]
    assert listing[0]["author"]["name"] == body["data"]["author"]["name"]


def test_upload_validation(client):
    response = client.post(f"{API}/upload", data={"Id": "42"})
    assert response.status_code == 400
    assert response.json()["code"] == 400

    assert _upload(client, author_id="not-a-number").status_code == 400
    assert _upload(client, folders=("only-one",)).status_code == 400
    assert client.get(f"{API}/all/length").json()["data"] == 0


def test_upload_invalid_name_rejects_whole_batch(client, db, content_root):
    """批次中任意一个文件名无效时，整批拒绝且不留下作者、记录或磁盘内容"""
    response = _upload(client, names=("a.png", "   "))
    assert response.status_code == 400
    assert response.json()["code"] == 400

    assert db.query(Author).count() == 0
    assert db.query(File).count() == 0
    assert not os.path.exists(os.path.join(content_root, "app/build/files/a.png"))


def test_upload_dot_names_rejected(client, db):
    for name in ("..", "."):
        response = _upload(client, names=(name,), folders=("pics",), nsfw=("0",))
        assert response.status_code == 400
        assert response.json()["code"] == 400
    assert db.query(File).count() == 0


def test_upload_write_failure_returns_envelope(client):
    with patch("app.services.upload_service.write_file_content", side_effect=OSError("disk full")):
        response = _upload(client)

    assert response.status_code == 404
    assert response.json() == {"code": 404, "msg": "文件写入失败", "data": None}
    assert client.get(f"{API}/all/length").json()["data"] == 0


def test_upload_form_field_names(client):
    """网页端使用首字母大写的字段名，小写字段名不会被识别"""
    files = [("File", ("x.png", b"x", "image/png"))]
    data = {"Folder": "pics", "NSFW": "1", "Title": "X", "Tags": "a b", "Description": "d", "Id": "7"}
    response = client.post(f"{API}/upload", files=files, data=data)
    assert response.status_code == 200
    uploaded = response.json()["data"]["files"][0]
    assert uploaded["title"] == "X"
    assert uploaded["tags"] == ["a_b"]
    assert uploaded["description"] == "d"
    assert uploaded["nsfw"] is True

    files = [("file", ("y.png", b"y", "image/png"))]
    assert client.post(f"{API}/upload", files=files, data={"id": "7"}).status_code == 400


def test_file_lookup_and_not_found(client):
    _upload(client)
    file_id = client.get(f"{API}/all").json()["data"][0]["id"]

    response = client.get(f"{API}/file/{file_id}")
    assert response.status_code == 200
    assert response.json()["data"]["id"] == file_id

    response = client.get(f"{API}/file/99999")
    assert response.status_code == 404
    assert response.json() == {"code": 404, "msg": "文件不存在", "data": None}


def test_random_endpoints(client):
    assert client.get(f"{API}/random").status_code == 404

    _upload(client)
    ids = [f["id"] for f in client.get(f"{API}/all").json()["data"]]
    assert client.get(f"{API}/random").json()["data"]["id"] in ids

    body = {"fileId": ids[0], "filter": {"nsfw": True}}
    response = client.post(f"{API}/random/media", json=body)
    assert response.status_code == 200
    assert response.json()["data"]["id"] == ids[1]

    response = client.post(f"{API}/random/media/id", json=body)
    assert response.json()["data"] == ids[1]

    body = {"fileId": ids[1], "filter": {"nsfw": True}}
    assert client.post(f"{API}/random/media", json=body).status_code == 404
    assert client.post(f"{API}/random/media/id", json=body).status_code == 404


def test_folder_search_and_author_queries(client):
    _upload(client, folders=("pics", "memes"), Tags=["cute", "funny"])
    _upload(client, author_id="43", names=("c.png",), folders=("pics",), nsfw=("0",))

    folder = client.get(f"{API}/folder/pics").json()["data"]
    assert [f["fileUrl"] for f in folder] == ["app/build/files/a.png", "app/build/files/c.png"]

    found = client.get(f"{API}/all/search/funny").json()["data"]
    assert [f["fileUrl"] for f in found] == ["app/build/files/b.png"]
    assert found[0]["tags"] == ["funny"]

    by_author = client.get(f"{API}/all/by/43").json()["data"]
    assert [f["fileUrl"] for f in by_author] == ["app/build/files/c.png"]

    name = client.get(f"{API}/names/43").json()["data"]
    assert name == by_author[0]["author"]["name"]
    assert client.get(f"{API}/names/777").status_code == 404

    facets = client.get(f"{API}/all/facets").json()["data"]
    assert facets == {"folders": ["memes", "pics"], "tags": ["cute", "funny"], "types": ["png"]}


def test_update_endpoints(client):
    _upload(client)
    file_id = client.get(f"{API}/all").json()["data"][0]["id"]

    response = client.post(f"{API}/update/{file_id}", data={"id": "42", "folder": "moved"})
    assert response.status_code == 200
    assert response.json()["data"][0]["folder"] == "moved"

    client.post(f"{API}/update/like/{file_id}", data={"id": "42"})
    response = client.post(f"{API}/update/like/{file_id}", data={"id": "42"})
    assert response.json()["data"][0]["likes"] == 2

    response = client.post(f"{API}/update/views/{file_id}", data={"id": "42"})
    assert response.json()["data"][0]["views"] == 1

    assert client.post(f"{API}/update/like/99999", data={"id": "42"}).status_code == 404
    assert client.post(f"{API}/update/{file_id}", data={"folder": "x"}).status_code == 400


def test_delete_file_endpoint(client, content_root):
    _upload(client)
    first, second = client.get(f"{API}/all").json()["data"]

    assert client.post(f"{API}/delete/{first['id']}").status_code == 400

    response = client.post(f"{API}/delete/{first['id']}", data={"id": "42"})
    assert response.status_code == 200
    assert [f["id"] for f in response.json()["data"]] == [second["id"]]
    assert not os.path.exists(os.path.join(content_root, first["fileUrl"]))

    assert client.post(f"{API}/delete/{first['id']}", data={"id": "42"}).status_code == 404


def test_delete_file_remove_failure_returns_envelope(client, content_root):
    _upload(client)
    first = client.get(f"{API}/all").json()["data"][0]

    with patch("app.services.catalog_service.os.remove", side_effect=PermissionError("denied")):
        response = client.post(f"{API}/delete/{first['id']}", data={"id": "42"})

    assert response.status_code == 404
    assert response.json() == {"code": 404, "msg": "文件删除失败", "data": None}
    assert client.get(f"{API}/all/length").json()["data"] == 2
    assert os.path.exists(os.path.join(content_root, first["fileUrl"]))


def test_comment_endpoints(client):
    _upload(client)
    first, second = client.get(f"{API}/all").json()["data"]

    response = client.post(f"{API}/comments/{first['id']}", data={"id": "42", "content": "hi", "date": "1700000000"})
    assert response.status_code == 200
    comments = response.json()["data"]
    assert comments[0]["author"]["authorId"] == 42
    assert comments[0]["date"] == 1700000000

    response = client.post(f"{API}/comments/{first['id']}", data={"id": "555", "content": "anon", "date": "1700000001"})
    comments = response.json()["data"]
    assert comments[1]["author"]["name"] == "Anonymous"
    assert comments[1]["author"]["authorId"] is None

    listing = client.get(f"{API}/comments/{first['id']}/all").json()["data"]
    assert [c["content"] for c in listing] == ["hi", "anon"]

    assert client.post(f"{API}/comments/99999", data={"id": "42", "content": "x", "date": "1"}).status_code == 404

    comment_id = listing[0]["id"]
    # 评论不属于第二个文件
    assert client.post(f"{API}/comments/{second['id']}/delete", data={"id": str(comment_id)}).status_code == 404
    response = client.post(f"{API}/comments/{first['id']}/delete", data={"id": str(comment_id)})
    assert response.status_code == 200
    assert [c["content"] for c in response.json()["data"]] == ["anon"]


def test_delete_author_endpoint(client, content_root):
    _upload(client)
    _upload(client, author_id="43", names=("c.png",), folders=("pics",), nsfw=("0",))

    response = client.post(f"{API}/authors/delete", json={"id": 42})
    assert response.status_code == 200
    remaining = response.json()["data"]
    assert [f["fileUrl"] for f in remaining] == ["app/build/files/c.png"]
    assert not os.path.exists(os.path.join(content_root, "app/build/files/a.png"))
    assert client.get(f"{API}/all/by/42").json()["data"] == []


def test_server_space(client):
    response = client.get(f"{API}/server/space")
    assert response.status_code == 200
    assert response.json()["data"] > 0


def run_api_tests():
    """运行所有接口测试"""
    return run_tests("HTTP 接口测试", [
        test_health,
        test_upload_and_list,
        test_upload_validation,
        test_upload_invalid_name_rejects_whole_batch,
        test_upload_dot_names_rejected,
        test_upload_write_failure_returns_envelope,
        test_upload_form_field_names,
        test_file_lookup_and_not_found,
        test_random_endpoints,
        test_folder_search_and_author_queries,
        test_update_endpoints,
        test_delete_file_endpoint,
        test_delete_file_remove_failure_returns_envelope,
        test_comment_endpoints,
        test_delete_author_endpoint,
        test_server_space,
    ])


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(message)s')
    success = run_api_tests()
    sys.exit(0 if success else 1)
