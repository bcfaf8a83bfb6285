"""Scripts executed inside the live VTOP page.

They use the page's own jQuery so the portal's cookies and session apply. Every
script is asynchronous: its last argument is the completion callback and it
always resolves with ``{ok: true, body}`` or ``{ok: false, status, error}``.
"""

# arguments: url, urlencoded body, callback
POST_FORM = r"""
var url = arguments[0], data = arguments[1];
var done = arguments[arguments.length - 1];
if (typeof window.jQuery === 'undefined') {
  done({ok: false, status: 0, error: 'jQuery is not loaded on this page'});
  return;
}
jQuery.ajax({
  type: 'POST',
  url: url,
  data: data,
  dataType: 'text',
  async: true,
  success: function (res) { done({ok: true, body: String(res)}); },
  error: function (xhr, status, err) {
    done({ok: false, status: xhr ? xhr.status : 0, error: String(err || status || 'AJAX request failed')});
  }
});
"""

# arguments: url, username, password, captcha, callback
SUBMIT_LOGIN_FORM = r"""
var url = arguments[0];
var done = arguments[arguments.length - 1];
if (typeof window.jQuery === 'undefined') {
  done({ok: false, status: 0, error: 'jQuery is not loaded on this page'});
  return;
}
var form = jQuery('#vtopLoginForm');
form.find('[name="username"]').val(arguments[1]);
form.find('[name="password"]').val(arguments[2]);
form.find('[name="captchaStr"]').val(arguments[3]);
jQuery.ajax({
  type: 'POST',
  url: url,
  data: form.serialize(),
  dataType: 'text',
  async: true,
  success: function (res) { done({ok: true, body: String(res)}); },
  error: function (xhr, status, err) {
    done({ok: false, status: xhr ? xhr.status : 0, error: String(err || status || 'AJAX request failed')});
  }
});
"""
