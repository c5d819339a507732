import io
import os
import ssl
import urllib.error
import urllib.request

from yt_track.networking import RequestHandler, Response
from yt_track.networking.exceptions import HTTPError, TransportError

TEST_DIR = os.path.dirname(os.path.abspath(__file__))


def testdata_path(*parts):
    return os.path.join(TEST_DIR, 'testdata', *parts)


def read_testdata(*parts, mode='r'):
    with open(testdata_path(*parts), mode, **({} if 'b' in mode else {'encoding': 'utf-8'})) as f:
        return f.read()


class FakeLogger:
    """Collects everything it is given, per level"""

    def __init__(self):
        self.messages = {'debug': [], 'warning': []}

    def debug(self, msg):
        self.messages['debug'].append(msg)

    def warning(self, msg):
        self.messages['warning'].append(msg)

    @property
    def warnings(self):
        return self.messages['warning']

    @property
    def debugs(self):
        return self.messages['debug']


def fake_params(verbose=True, **kwargs):
    return {'logger': FakeLogger(), 'verbose': verbose, **kwargs}


def http_server_port(httpd):
    if os.name == 'java' and isinstance(httpd.socket, ssl.SSLSocket):
        # In Jython SSLSocket is not a subclass of socket.socket
        sock = httpd.socket.sock
    else:
        sock = httpd.socket
    return sock.getsockname()[1]


class FakeRH(RequestHandler):
    """Answers every request with the same canned response"""

    def __init__(self, status=200, body=b'', exc=None, **kwargs):
        super().__init__(**kwargs)
        self.status = status
        self.body = body
        self.exc = exc
        self.requests = []
        self.responses = []

    def _send(self, request):
        self.requests.append(request)
        if self.exc:
            raise self.exc
        res = Response(io.BytesIO(self.body), request.url, {'Content-Type': 'video/vnd.mpeg.dash.mpd'}, self.status)
        self.responses.append(res)
        if not 200 <= self.status < 300:
            raise HTTPError(res)
        return res


class UrllibRH(RequestHandler):
    """Minimal urllib handler, for tests against a local server"""

    def _send(self, request):
        req = urllib.request.Request(
            request.url, headers={**self.headers, **request.headers}, method=request.method)
        # Ignore environment proxies, the server is on localhost
        opener = urllib.request.build_opener(urllib.request.ProxyHandler({}))
        try:
            res = opener.open(req, timeout=self.timeout or 10)
        except urllib.error.HTTPError as e:
            raise HTTPError(Response(e, e.url, e.headers, e.code, e.reason)) from e
        except OSError as e:
            raise TransportError(cause=e) from e
        return Response(res, res.url, res.headers, res.status, res.reason)
